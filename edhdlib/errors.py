"""
Errors and Error Codes
**********************

All failures of the derivation engine and of the extended key codec are reported as a subclass of :class:`HDError`.
Every :class:`HDError` carries a message and one of the error codes below so callers can map them onto their own reporting.
"""

# Error codes
BAD_ARGUMENT = -1 #: Bad, malformed, or out of range argument was provided
INVALID_SEED_LENGTH = -2 #: Seed is shorter than 128 bits or longer than 512 bits
INVALID_PATH = -3 #: Derivation path does not match the path grammar
EXPECTED_MASTER_NODE = -4 #: A path starting with "m" was applied to a child node
MISSING_PRIVATE_KEY = -5 #: Hardened derivation or signing attempted without a private key
INDEX_OVERFLOW = -6 #: Index does not fit in the range allowed for the derivation type
DERIVATION_FAILED = -7 #: Public child derivation did not produce a valid key
INVALID_ENCODING = -8 #: Text is not valid base58
INVALID_CHECKSUM = -9 #: base58check checksum does not match
INVALID_LENGTH = -10 #: Payload or key field has the wrong length
INVALID_VERSION = -11 #: Version bytes do not match the network prefixes
INVALID_MASTER_NODE = -12 #: Depth 0 with a non-zero parent fingerprint or child number
INVALID_PRIVATE_KEY_MARKER = -13 #: Private key field is not prefixed with 0x00
INVALID_PUBLIC_KEY = -14 #: Public key field is not a valid ed25519 point encoding
UNAVAILABLE_ACTION = -15 #: Operation is not available for ed25519 extended keys


# Exceptions
class HDError(Exception):
    """
    Generic exception type produced by edhdlib
    Subclassed by specific Errors to have Exceptions that have specific error codes.

    Contains a message and error code.
    """
    def __init__(self, msg: str, code: int) -> None:
        """
        Create an exception with the message and error code

        :param msg: The error message
        :param code: The error code
        """
        Exception.__init__(self, msg)
        self.code = code
        self.msg = msg

    def get_code(self) -> int:
        """
        Get the error code for this Error

        :return: The error code
        """
        return self.code

    def get_msg(self) -> str:
        """
        Get the error message for this Error

        :return: The error message
        """
        return self.msg

    def __str__(self) -> str:
        return self.msg

class BadArgumentError(HDError):
    """
    :class:`HDError` for :data:`BAD_ARGUMENT`
    """
    def __init__(self, msg: str):
        """
        :param msg: The error message
        """
        HDError.__init__(self, msg, BAD_ARGUMENT)

class InvalidSeedLengthError(HDError):
    """
    :class:`HDError` for :data:`INVALID_SEED_LENGTH`
    """
    def __init__(self, msg: str):
        """
        :param msg: The error message
        """
        HDError.__init__(self, msg, INVALID_SEED_LENGTH)

class InvalidPathError(HDError):
    """
    :class:`HDError` for :data:`INVALID_PATH`
    """
    def __init__(self, msg: str):
        """
        :param msg: The error message
        """
        HDError.__init__(self, msg, INVALID_PATH)

class ExpectedMasterNodeError(HDError):
    """
    :class:`HDError` for :data:`EXPECTED_MASTER_NODE`
    """
    def __init__(self, msg: str):
        """
        :param msg: The error message
        """
        HDError.__init__(self, msg, EXPECTED_MASTER_NODE)

class MissingPrivateKeyError(HDError):
    """
    :class:`HDError` for :data:`MISSING_PRIVATE_KEY`
    """
    def __init__(self, msg: str):
        """
        :param msg: The error message
        """
        HDError.__init__(self, msg, MISSING_PRIVATE_KEY)

class IndexOverflowError(HDError):
    """
    :class:`HDError` for :data:`INDEX_OVERFLOW`
    """
    def __init__(self, msg: str):
        """
        :param msg: The error message
        """
        HDError.__init__(self, msg, INDEX_OVERFLOW)

class DerivationError(HDError):
    """
    :class:`HDError` for :data:`DERIVATION_FAILED`
    """
    def __init__(self, msg: str):
        """
        :param msg: The error message
        """
        HDError.__init__(self, msg, DERIVATION_FAILED)

class InvalidEncodingError(HDError):
    """
    :class:`HDError` for :data:`INVALID_ENCODING`
    """
    def __init__(self, msg: str):
        """
        :param msg: The error message
        """
        HDError.__init__(self, msg, INVALID_ENCODING)

class InvalidChecksumError(HDError):
    """
    :class:`HDError` for :data:`INVALID_CHECKSUM`
    """
    def __init__(self, msg: str):
        """
        :param msg: The error message
        """
        HDError.__init__(self, msg, INVALID_CHECKSUM)

class InvalidLengthError(HDError):
    """
    :class:`HDError` for :data:`INVALID_LENGTH`
    """
    def __init__(self, msg: str):
        """
        :param msg: The error message
        """
        HDError.__init__(self, msg, INVALID_LENGTH)

class InvalidVersionError(HDError):
    """
    :class:`HDError` for :data:`INVALID_VERSION`
    """
    def __init__(self, msg: str):
        """
        :param msg: The error message
        """
        HDError.__init__(self, msg, INVALID_VERSION)

class InvalidMasterNodeError(HDError):
    """
    :class:`HDError` for :data:`INVALID_MASTER_NODE`
    """
    def __init__(self, msg: str):
        """
        :param msg: The error message
        """
        HDError.__init__(self, msg, INVALID_MASTER_NODE)

class InvalidPrivateKeyMarkerError(HDError):
    """
    :class:`HDError` for :data:`INVALID_PRIVATE_KEY_MARKER`
    """
    def __init__(self, msg: str):
        """
        :param msg: The error message
        """
        HDError.__init__(self, msg, INVALID_PRIVATE_KEY_MARKER)

class InvalidPublicKeyError(HDError):
    """
    :class:`HDError` for :data:`INVALID_PUBLIC_KEY`
    """
    def __init__(self, msg: str):
        """
        :param msg: The error message
        """
        HDError.__init__(self, msg, INVALID_PUBLIC_KEY)

class UnavailableActionError(HDError):
    """
    :class:`HDError` for :data:`UNAVAILABLE_ACTION`
    """
    def __init__(self, msg: str):
        """
        :param msg: The error message
        """
        HDError.__init__(self, msg, UNAVAILABLE_ACTION)
