import os
from urllib.parse import urlparse

from chunk_error import ChunkNotFoundError, FetchError
from chunk_model import ChunkModel, ChunkType
from png_funs import describe_chunks, is_url, read_png, write_png


def _lookup_tag(chunk_type):
    # Existing chunks may have been written with a lowercase reserved
    # letter, so lookups only need four ASCII letters.
    return str(ChunkType.from_bytes(chunk_type.encode("ascii", "replace")))


def _default_output(file_path):
    if not is_url(file_path):
        return file_path
    name = os.path.basename(urlparse(file_path).path)
    return name or "image.png"


def encode(file_path, chunk_type, message, output_path=None):
    chunk = ChunkModel(ChunkType.from_str(chunk_type), message.encode("utf-8"))
    png = read_png(file_path)
    png.append_chunk(chunk)

    write_path = output_path or _default_output(file_path)
    write_png(write_path, png)
    return f"Message hidden in {chunk.chunk_type} chunk, saved to {write_path}"


def decode(file_path, chunk_type):
    tag = _lookup_tag(chunk_type)
    png = read_png(file_path)

    chunks = png.chunks_by_type(tag)
    if not chunks:
        raise ChunkNotFoundError(tag)
    return [chunk.data_as_string() for chunk in chunks]


def remove(file_path, chunk_type):
    tag = _lookup_tag(chunk_type)
    if is_url(file_path):
        raise FetchError(file_path, "cannot remove chunks from a remote file")
    png = read_png(file_path)

    removed = png.remove_first_chunk(tag)
    if removed is None:
        raise ChunkNotFoundError(tag)

    write_png(file_path, png)
    return f"Removed {removed.chunk_type} chunk ({removed.length} bytes) from {file_path}"


def print_png(file_path):
    return describe_chunks(read_png(file_path))
