class ChunkError(ValueError):
    pass


class SignatureMismatchError(ChunkError):
    def __init__(self, header):
        self.header = header
        super().__init__(f"Not a valid PNG file (header {header.hex()})")


class TruncatedChunkError(ChunkError):
    def __init__(self, offset, needed, available):
        self.offset = offset
        self.needed = needed
        self.available = available
        super().__init__(
            f"Truncated chunk at offset {offset}: "
            f"needs {needed} bytes, {available} left"
        )


class InvalidChunkTypeError(ChunkError):
    pass


class ChecksumMismatchError(ChunkError):
    def __init__(self, chunk_type, stored, computed):
        self.chunk_type = chunk_type
        self.stored = stored
        self.computed = computed
        super().__init__(
            f"CRC mismatch in {chunk_type} chunk: "
            f"stored {stored:08x}, computed {computed:08x}"
        )


class InvalidUtf8PayloadError(ChunkError):
    pass


class ChunkNotFoundError(ChunkError):
    def __init__(self, chunk_type):
        self.chunk_type = chunk_type
        super().__init__(f"No {chunk_type} chunk found")


class FetchError(ChunkError):
    def __init__(self, source, reason):
        self.source = source
        self.reason = reason
        super().__init__(f"Could not read {source}: {reason}")
