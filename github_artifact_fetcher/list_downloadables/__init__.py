from .list_downloadables import list_downloadables, releases_url, tags_url, to_descriptor

__all__ = ["list_downloadables", "releases_url", "tags_url", "to_descriptor"]
