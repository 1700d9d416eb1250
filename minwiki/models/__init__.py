from minwiki.models.models import PageRecord

__all__ = ["PageRecord"]
