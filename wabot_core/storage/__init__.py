from wabot_core.storage.config_store import ConfigDocument, ConfigStore, Document, atomic_write_json

__all__ = ["ConfigDocument", "ConfigStore", "Document", "atomic_write_json"]
