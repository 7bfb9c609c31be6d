from catalog_match.runners.local import LocalMatchPipeline, match_catalogs

__all__ = ["LocalMatchPipeline", "match_catalogs"]
