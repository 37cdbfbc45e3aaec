class SchemeSyncError(Exception):
    pass


class MalformedInputError(SchemeSyncError, ValueError):
    pass


class PersistenceError(SchemeSyncError):
    pass


class ArchiveError(SchemeSyncError):
    pass


class ConfigError(SchemeSyncError):
    pass
