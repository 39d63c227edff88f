import struct
import zlib

from chunk_error import (
    ChecksumMismatchError,
    InvalidChunkTypeError,
    InvalidUtf8PayloadError,
    TruncatedChunkError,
)

# length(4) + type(4) + crc(4)
CHUNK_OVERHEAD = 12

# CC - critical chunk | AC - ancillary chunk
chunk_types = {
    "IHDR": "image header",  # CC
    "PLTE": "palette",  # CC
    "IDAT": "image data",  # CC
    "IEND": "image trailer",  # CC
    "sRGB": "standard RGB colour space",  # AC
    "gAMA": "image gamma",  # AC
    "pHYs": "physical pixel dimensions",  # AC
    "sBIT": "significant bits",  # AC
    "sPLT": "suggested palette",  # AC
    "tIME": "last modification time",  # AC
    "cHRM": "primary chromaticities",  # AC
    "bKGD": "background colour",  # AC
    "tEXt": "textual data",  # AC
    "iTXt": "international textual data",  # AC
    "zTXt": "compressed textual data",  # AC
}


def _is_letter(byte):
    return 65 <= byte <= 90 or 97 <= byte <= 122


def _is_upper(byte):
    return 65 <= byte <= 90


def _is_lower(byte):
    return 97 <= byte <= 122


class ChunkType:
    """Four ASCII letters naming a chunk.

    The case of each letter is a flag: critical (0), public (1),
    reserved (2) and safe-to-copy (3).
    """

    def __init__(self, code):
        self._code = bytes(code)

    @classmethod
    def from_bytes(cls, code):
        # Relaxed: any letter case is accepted at index 2 so that chunks
        # already present in a file can always be read back.
        code = bytes(code)
        if len(code) != 4:
            raise InvalidChunkTypeError(
                f"Chunk type must be 4 bytes long, got {len(code)}"
            )
        if not all(_is_letter(b) for b in code):
            raise InvalidChunkTypeError(f"Chunk type {code!r} is not ASCII letters")
        return cls(code)

    @classmethod
    def from_str(cls, name):
        if len(name) != 4:
            raise InvalidChunkTypeError(
                f"Chunk type {name!r} must be 4 characters long"
            )
        try:
            code = name.encode("ascii")
        except UnicodeEncodeError:
            raise InvalidChunkTypeError(f"Chunk type {name!r} is not ASCII")
        if not all(_is_letter(b) for b in code):
            raise InvalidChunkTypeError(f"Chunk type {name!r} is not ASCII letters")
        if not cls.is_reserved_byte_valid(code[2]):
            raise InvalidChunkTypeError(
                f"Chunk type {name!r}: third character must be uppercase"
            )
        return cls(code)

    @staticmethod
    def is_reserved_byte_valid(byte):
        return _is_upper(byte)

    def bytes(self):
        return self._code

    @property
    def is_critical(self):
        return _is_upper(self._code[0])

    @property
    def is_public(self):
        return _is_upper(self._code[1])

    @property
    def is_reserved_bit_valid(self):
        return self.is_reserved_byte_valid(self._code[2])

    @property
    def is_safe_to_copy(self):
        return _is_lower(self._code[3])

    @property
    def is_valid(self):
        return all(_is_letter(b) for b in self._code) and self.is_reserved_bit_valid

    def __eq__(self, other):
        if not isinstance(other, ChunkType):
            return NotImplemented
        return self._code == other._code

    def __hash__(self):
        return hash(self._code)

    def __str__(self):
        return self._code.decode("ascii")

    def __repr__(self):
        return f"ChunkType({str(self)!r})"


class ChunkModel:
    def __init__(self, chunk_type, data=b""):
        self.chunk_type = chunk_type
        self.data = bytes(data)
        # CRC-32 (ISO-HDLC) over type + data, length is not covered
        self.crc = zlib.crc32(self.data, zlib.crc32(chunk_type.bytes()))

    @classmethod
    def from_bytes(cls, buffer, offset=0):
        available = len(buffer) - offset
        if available < CHUNK_OVERHEAD:
            raise TruncatedChunkError(offset, CHUNK_OVERHEAD, available)

        # chunk = [4B length][4B type][payload][4B CRC]
        length, type_bytes = struct.unpack_from(">I4s", buffer, offset)
        if CHUNK_OVERHEAD + length > available:
            raise TruncatedChunkError(offset, CHUNK_OVERHEAD + length, available)

        chunk_type = ChunkType.from_bytes(type_bytes)
        data_start = offset + 8
        data = buffer[data_start : data_start + length]
        (stored_crc,) = struct.unpack_from(">I", buffer, data_start + length)

        chunk = cls(chunk_type, data)
        if chunk.crc != stored_crc:
            raise ChecksumMismatchError(chunk_type, stored_crc, chunk.crc)
        return chunk

    @property
    def length(self):
        return len(self.data)

    @property
    def size(self):
        return CHUNK_OVERHEAD + self.length

    def data_as_string(self):
        try:
            return self.data.decode("utf-8")
        except UnicodeDecodeError as e:
            raise InvalidUtf8PayloadError(
                f"{self.chunk_type} chunk data is not valid UTF-8: {e.reason}"
            )

    def as_bytes(self):
        return (
            struct.pack(">I", self.length)
            + self.chunk_type.bytes()
            + self.data
            + struct.pack(">I", self.crc)
        )

    def write_to_file(self, file):
        file.write(struct.pack(">I", self.length))
        file.write(self.chunk_type.bytes())
        file.write(self.data)
        file.write(struct.pack(">I", self.crc))

    def __eq__(self, other):
        if not isinstance(other, ChunkModel):
            return NotImplemented
        return self.chunk_type == other.chunk_type and self.data == other.data

    def __repr__(self):
        return f"ChunkModel({self.chunk_type!r}, length={self.length})"

    def __str__(self):
        return f"Type:{self.chunk_type}    Length:{self.length}    CRC:{self.crc:08x}"
