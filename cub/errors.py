class CubError(Exception):
    pass

class AlreadyInitialized(CubError):
    pass

class NotARepository(CubError):
    pass

class SourceFileNotFound(CubError):
    pass

class ObjectNotFound(CubError):
    def __init__(self, digest: str):
        self.digest = digest
        super().__init__(f"object {digest} does not exist")

class CorruptRecord(CubError):
    pass

class IOFailure(CubError):
    pass
