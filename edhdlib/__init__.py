__version__ = '0.2.0'

from .bip32 import (
    CATAPULT_SEED_KEY,
    ED25519_SEED_KEY,
    HARDENED_FLAG,
    H_,
    is_hardened,
)
from .common import Network
from .curve import CATAPULT, ED25519, Ed25519Curve
from .errors import HDError
from .key import (
    ExtendedKey,
    ExtendedPrivateKey,
    ExtendedPublicKey,
    decode,
    encode,
    parse_path,
    path_to_string,
)

__all__ = [
    "CATAPULT",
    "CATAPULT_SEED_KEY",
    "ED25519",
    "ED25519_SEED_KEY",
    "Ed25519Curve",
    "ExtendedKey",
    "ExtendedPrivateKey",
    "ExtendedPublicKey",
    "HARDENED_FLAG",
    "HDError",
    "H_",
    "Network",
    "decode",
    "encode",
    "is_hardened",
    "parse_path",
    "path_to_string",
]
