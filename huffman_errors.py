# filename: huffman_errors.py


class CodecError(Exception):
    """Base class for every failure raised by the Huffman codec."""


class EmptyInputError(CodecError):
    pass


class FileAccessError(CodecError):
    pass


class TruncatedTreeError(CodecError):
    pass


class CorruptTreeError(CodecError):
    pass


class TruncatedStreamError(CodecError):
    pass


class CorruptPaddingError(CodecError):
    pass


class CorruptPayloadError(CodecError):
    pass
