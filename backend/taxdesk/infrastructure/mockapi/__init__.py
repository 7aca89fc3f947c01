from .record_store_client import MockApiRecordStore

__all__ = ["MockApiRecordStore"]
