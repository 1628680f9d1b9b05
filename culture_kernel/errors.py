class CultureKernelError(Exception):
    pass

class StorageUnavailable(CultureKernelError):
    pass

class DecodeFailure(CultureKernelError):
    def __init__(self, message: str, protocol_id: str = ""):
        super().__init__(message)
        self.protocol_id = protocol_id

class ReseedFailure(CultureKernelError):
    pass

class RequestHandlingError(CultureKernelError):
    pass
