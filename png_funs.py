import os

import chardet
import requests

from chunk_error import FetchError, InvalidUtf8PayloadError, SignatureMismatchError
from chunk_model import ChunkModel, chunk_types

PNG_SIGNATURE = b"\x89PNG\r\n\x1a\n"

# seconds to wait for a remote image
FETCH_TIMEOUT = 30.0


def fetch_timeout(source):
    value = os.environ.get("PNGME_FETCH_TIMEOUT")
    if value is None:
        return FETCH_TIMEOUT
    try:
        return float(value)
    except ValueError:
        raise FetchError(source, f"invalid PNGME_FETCH_TIMEOUT {value!r}")


class Png:
    header = PNG_SIGNATURE

    def __init__(self, chunks=None):
        self._chunks = list(chunks) if chunks else []

    @classmethod
    def from_bytes(cls, buffer):
        # Check if the buffer is a valid PNG file
        if buffer[: len(PNG_SIGNATURE)] != PNG_SIGNATURE:
            raise SignatureMismatchError(bytes(buffer[: len(PNG_SIGNATURE)]))

        chunks = []
        offset = len(PNG_SIGNATURE)
        while offset < len(buffer):
            chunk = ChunkModel.from_bytes(buffer, offset)
            chunks.append(chunk)
            offset += chunk.size
        return cls(chunks)

    @property
    def chunks(self):
        return list(self._chunks)

    def append_chunk(self, chunk):
        self._chunks.append(chunk)

    def chunks_by_type(self, chunk_type):
        return [chunk for chunk in self._chunks if str(chunk.chunk_type) == chunk_type]

    def remove_first_chunk(self, chunk_type):
        for i, chunk in enumerate(self._chunks):
            if str(chunk.chunk_type) == chunk_type:
                return self._chunks.pop(i)
        return None

    def as_bytes(self):
        return self.header + b"".join(chunk.as_bytes() for chunk in self._chunks)

    def write_to_file(self, file):
        file.write(self.header)
        for chunk in self._chunks:
            chunk.write_to_file(file)

    def __len__(self):
        return len(self._chunks)

    def __iter__(self):
        return iter(self._chunks)


def is_url(source):
    return source.startswith(("http://", "https://"))


def read_source(source):
    if not is_url(source):
        with open(source, "rb") as file:
            return file.read()

    timeout = fetch_timeout(source)
    try:
        response = requests.get(source, timeout=timeout)
        response.raise_for_status()
    except requests.RequestException as e:
        raise FetchError(source, e)
    return response.content


def read_png(source):
    return Png.from_bytes(read_source(source))


def write_png(path, png):
    with open(path, "wb") as file:
        png.write_to_file(file)


def payload_text(chunk):
    try:
        return chunk.data_as_string()
    except InvalidUtf8PayloadError:
        # Attempt to decode the data using the detected encoding
        detected_encoding = chardet.detect(chunk.data)["encoding"]
        if detected_encoding is None:
            return None
        try:
            return chunk.data.decode(detected_encoding)
        except (UnicodeDecodeError, LookupError):
            return None


def describe_chunks(png):
    lines = [f"PNG file, {len(png)} chunks"]
    for index, chunk in enumerate(png):
        name = chunk_types.get(str(chunk.chunk_type), "custom")
        kind = "critical" if chunk.chunk_type.is_critical else "ancillary"
        lines.append(f"{index:>3}  {chunk}    {kind}, {name}")

        # Only custom chunks can carry a hidden message
        if name == "custom":
            text = payload_text(chunk)
            if text is None:
                lines.append(f"     data: <{chunk.length} bytes of binary data>")
            else:
                lines.append(f"     data: {text!r}")
    return lines
