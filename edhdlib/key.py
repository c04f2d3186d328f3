"""
Key Classes and Utilities
*************************

Classes and utilities for working with ed25519 extended keys: deriving them from a seed, walking derivation paths,
and converting them to and from the BIP 32 serialization format.

An :class:`ExtendedKey` is either an :class:`ExtendedPrivateKey`, which can sign and derive hardened children,
or a neutered :class:`ExtendedPublicKey`, which can only verify and derive non-hardened children.
"""

from . import base58
from .bip32 import (
    CATAPULT_SEED_KEY,
    HARDENED_FLAG,
    UINT32_MAX,
    H_,
    ckd_priv,
    ckd_pub,
    is_hardened,
    master_key,
)
from .common import (
    Network,
    hash160,
)
from .curve import (
    CATAPULT,
    KEY_SIZE,
    Ed25519Curve,
)
from .errors import (
    BadArgumentError,
    ExpectedMasterNodeError,
    IndexOverflowError,
    InvalidLengthError,
    InvalidMasterNodeError,
    InvalidPathError,
    InvalidPrivateKeyMarkerError,
    InvalidPublicKeyError,
    InvalidVersionError,
    MissingPrivateKeyError,
    UnavailableActionError,
)

import binascii
import logging
import re
import struct
from functools import cached_property
from typing import (
    Dict,
    List,
    Optional,
    Sequence,
    Tuple,
)


EXTENDED_KEY_SIZE = 78
CHAINCODE_SIZE = 32

PATH_RE = re.compile(r"(m/)?(\d+'?/)*\d+'?", re.ASCII)


class ExtendedKey(object):
    """
    A BIP 32 extended key over ed25519.

    This class holds what private and public extended keys have in common. Instances are immutable.
    Use :meth:`ExtendedPrivateKey.from_seed` or :meth:`ExtendedKey.deserialize` to create one.
    """

    def __init__(
        self,
        chaincode: bytes,
        network: Network = Network.MAIN,
        depth: int = 0,
        child_num: int = 0,
        parent_fingerprint: int = 0,
        curve: Ed25519Curve = CATAPULT,
    ) -> None:
        """
        :param chaincode: The 32 byte chaincode of this key
        :param network: The network whose version prefixes are used for serialization
        :param depth: The depth of this key as defined in BIP 32
        :param child_num: The number of this key as defined in BIP 32
        :param parent_fingerprint: The fingerprint of the parent key as a 32 bit integer
        :param curve: The curve engine used for this key and its children
        """
        if len(chaincode) != CHAINCODE_SIZE:
            raise InvalidLengthError(f"Chaincode must be {CHAINCODE_SIZE} bytes, got {len(chaincode)}")
        if not 0 <= depth <= 0xff:
            raise BadArgumentError(f"Depth {depth} does not fit in a byte")
        if not 0 <= child_num <= UINT32_MAX:
            raise BadArgumentError(f"Child number {child_num} is not a 32 bit unsigned integer")
        if not 0 <= parent_fingerprint <= UINT32_MAX:
            raise BadArgumentError(f"Parent fingerprint {parent_fingerprint} is not a 32 bit unsigned integer")
        if depth == 0 and (parent_fingerprint != 0 or child_num != 0):
            raise InvalidMasterNodeError("A key with depth 0 must have parent fingerprint 0 and child number 0")

        self._chaincode = bytes(chaincode)
        self._network = network
        self._depth = depth
        self._child_num = child_num
        self._parent_fingerprint = parent_fingerprint
        self._curve = curve

    @property
    def chaincode(self) -> bytes:
        return self._chaincode

    @property
    def network(self) -> Network:
        return self._network

    @property
    def depth(self) -> int:
        return self._depth

    @property
    def child_num(self) -> int:
        return self._child_num

    @property
    def parent_fingerprint(self) -> int:
        return self._parent_fingerprint

    @property
    def curve(self) -> Ed25519Curve:
        return self._curve

    @property
    def pubkey(self) -> bytes:
        """
        The 32 byte ed25519 public key
        """
        raise NotImplementedError("The ExtendedKey base class does not implement this method")

    @property
    def privkey(self) -> Optional[bytes]:
        """
        The 32 byte ed25519 private key, or None for a neutered key
        """
        return None

    def get_privkey(self) -> bytes:
        """
        Get the private key, failing for neutered keys.

        :return: The 32 byte private key
        """
        if self.privkey is None:
            raise MissingPrivateKeyError("Missing private key")
        return self.privkey

    @property
    def identifier(self) -> bytes:
        """
        The key identifier, RIPEMD160 of the SHA3-256 of the public key
        """
        return hash160(self.pubkey)

    @property
    def fingerprint(self) -> bytes:
        """
        The first 4 bytes of the key identifier
        """
        return self.identifier[0:4]

    @property
    def fingerprint_int(self) -> int:
        return struct.unpack(">L", self.fingerprint)[0]

    def is_neutered(self) -> bool:
        return self.privkey is None

    def neutered(self) -> 'ExtendedPublicKey':
        """
        Get the extended public key of this key.
        """
        raise NotImplementedError("The ExtendedKey base class does not implement this method")

    def _derive_child(self, i: int) -> 'ExtendedKey':
        raise NotImplementedError("The ExtendedKey base class does not implement this method")

    def derive(self, i: int) -> 'ExtendedKey':
        """
        Derive the child key at index ``i``.

        A private key derives a private child for any index. A neutered key derives
        a public child and only for non-hardened indexes.

        :param i: The child index, with :data:`~edhdlib.bip32.HARDENED_FLAG` set for hardened derivation
        """
        if not 0 <= i <= UINT32_MAX:
            raise BadArgumentError(f"Child index {i} is not a 32 bit unsigned integer")
        if is_hardened(i) and self.is_neutered():
            raise MissingPrivateKeyError("Missing private key for hardened child key derivation")
        return self._derive_child(i)

    def derive_hardened(self, i: int) -> 'ExtendedKey':
        """
        Derive the hardened child key at index ``i``.

        :param i: The child index without the hardened flag, at most 2^31 - 1
        """
        if i < 0:
            raise BadArgumentError(f"Child index {i} is negative")
        if i > HARDENED_FLAG - 1:
            raise IndexOverflowError("Hardened derivation maximum index overflow")
        return self.derive(H_(i))

    def derive_path(self, path: str) -> 'ExtendedKey':
        """
        Derive the key at the given path.

        Paths look like ``m/44'/43'/0'/0'/0'`` or ``0'/1``. Paths starting with ``m`` can only be
        applied to a master key.

        :param path: The derivation path
        """
        segments, from_master = _split_path(path)
        if from_master and self.parent_fingerprint != 0:
            raise ExpectedMasterNodeError("Expected master node with \"m\" derivation, but got child with parent fingerprint")

        logging.debug("Deriving path %s at depth %d", path, self.depth)
        key = self
        for i, hardened in segments:
            if hardened:
                key = key.derive_hardened(i)
            else:
                key = key.derive(i)
        return key

    def sign(self, message: bytes) -> bytes:
        """
        Sign ``message`` with this key.

        :param message: The data to sign
        :return: The 64 byte signature
        """
        raise MissingPrivateKeyError("Missing private key for signing")

    def verify(self, message: bytes, signature: bytes) -> bool:
        """
        Verify a signature made by this key.

        :param message: The data that was supposedly signed
        :param signature: The signature to check
        :return: True for a valid signature, False otherwise
        """
        return self.curve.verify(message, self.pubkey, signature)

    def to_wif(self) -> str:
        raise UnavailableActionError("ed25519 extended keys cannot be converted to WIF")

    def _key_data(self) -> bytes:
        raise NotImplementedError("The ExtendedKey base class does not implement this method")

    def _version(self) -> int:
        return self.network.public_prefix if self.is_neutered() else self.network.private_prefix

    def serialize(self) -> bytes:
        """
        Serialize the ExtendedKey with the serialization format described in BIP 32.
        Does not create an xpub string, but the bytes serialized here can be Base58 check encoded into one.

        :return: BIP 32 serialized extended key
        """
        r = struct.pack(">L", self._version())
        r += struct.pack("B", self.depth)
        r += struct.pack(">L", self.parent_fingerprint)
        r += struct.pack(">L", self.child_num)
        r += self.chaincode
        # 0x00 || key for both private keys and 32 byte ed25519 public keys
        r += b"\x00" + self._key_data()
        return r

    def to_string(self) -> str:
        """
        Serialize the ExtendedKey as a Base58 check encoded string

        :return: Base58 check encoded extended key
        """
        return base58.encode_check(self.serialize())

    @classmethod
    def from_bytes(cls, data: bytes, network: Optional[Network] = None, curve: Ed25519Curve = CATAPULT) -> 'ExtendedKey':
        """
        Create an :class:`~ExtendedKey` from a serialized extended key

        :param data: The 78 byte serialized key
        :param network: The network whose prefixes the version must match. If None, any known network is accepted.
        :param curve: The curve engine for the resulting key
        :return: An :class:`ExtendedPrivateKey` or an :class:`ExtendedPublicKey` depending on the version
        """
        if len(data) != EXTENDED_KEY_SIZE:
            raise InvalidLengthError(f"Extended key payload must be exactly {EXTENDED_KEY_SIZE} bytes, but got {len(data)} bytes")

        version, depth, parent_fingerprint, child_num = struct.unpack(">LBLL", data[0:13])
        network, is_private = _lookup_version(version, network)

        if depth == 0 and parent_fingerprint != 0:
            raise InvalidMasterNodeError(f"Expected master node but got parent fingerprint {parent_fingerprint:08x}")
        if depth == 0 and child_num != 0:
            raise InvalidMasterNodeError(f"Expected child number 0 with depth 0 but got {child_num}")

        chaincode = data[13:45]
        marker = data[45]
        key = data[46:78]

        if is_private:
            if marker != 0:
                raise InvalidPrivateKeyMarkerError("Private key must be prefixed with 0x00")
            return ExtendedPrivateKey(key, chaincode, network, depth, child_num, parent_fingerprint, curve)

        if marker != 0:
            raise InvalidPublicKeyError("ed25519 public key must be prefixed with 0x00")
        return ExtendedPublicKey(key, chaincode, network, depth, child_num, parent_fingerprint, curve)

    @classmethod
    def deserialize(cls, s: str, network: Optional[Network] = None, curve: Ed25519Curve = CATAPULT) -> 'ExtendedKey':
        """
        Create an :class:`~ExtendedKey` from a Base58 check encoded extended key

        :param s: The Base58 check encoded extended key
        :param network: The network whose prefixes the version must match. If None, any known network is accepted.
        :param curve: The curve engine for the resulting key
        """
        return cls.from_bytes(base58.decode_check(s), network, curve)

    def get_printable_dict(self) -> Dict[str, object]:
        """
        Get the attributes of this ExtendedKey as a dictionary that can be printed

        :return: Dictionary containing ExtendedKey information that can be printed
        """
        d: Dict[str, object] = {}
        d['network'] = str(self.network)
        d['private'] = not self.is_neutered()
        d['depth'] = self.depth
        d['parent_fingerprint'] = f"{self.parent_fingerprint:08x}"
        d['child_num'] = self.child_num
        d['chaincode'] = binascii.hexlify(self.chaincode).decode()
        if self.privkey is not None:
            d['privkey'] = binascii.hexlify(self.privkey).decode()
        d['pubkey'] = binascii.hexlify(self.pubkey).decode()
        return d

    def _fields(self) -> Tuple[object, ...]:
        return (type(self), self.curve, self.network, self.depth, self.child_num, self.parent_fingerprint, self.chaincode, self._key_data())

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, ExtendedKey):
            return NotImplemented
        return self._fields() == other._fields()

    def __hash__(self) -> int:
        return hash(self._fields())

    def __repr__(self) -> str:
        return f"{type(self).__name__}(network={self.network}, depth={self.depth}, child_num={self.child_num}, parent_fingerprint={self.parent_fingerprint:08x})"


class ExtendedPrivateKey(ExtendedKey):
    """
    An extended key holding an ed25519 private key.
    The public key is computed from the private key on first use.
    """

    def __init__(
        self,
        privkey: bytes,
        chaincode: bytes,
        network: Network = Network.MAIN,
        depth: int = 0,
        child_num: int = 0,
        parent_fingerprint: int = 0,
        curve: Ed25519Curve = CATAPULT,
    ) -> None:
        """
        :param privkey: The 32 byte private key
        """
        if len(privkey) != KEY_SIZE:
            raise InvalidLengthError(f"Private key must be {KEY_SIZE} bytes, got {len(privkey)}")
        ExtendedKey.__init__(self, chaincode, network, depth, child_num, parent_fingerprint, curve)
        self._privkey = bytes(privkey)

    @classmethod
    def from_seed(
        cls,
        seed: bytes,
        network: Network = Network.MAIN,
        curve: Ed25519Curve = CATAPULT,
        seed_key: bytes = CATAPULT_SEED_KEY,
    ) -> 'ExtendedPrivateKey':
        """
        Create the master key of the tree generated by ``seed``.

        :param seed: A seed of 128 to 512 bits
        :param network: The network of the master key
        :param curve: The curve engine of the master key
        :param seed_key: The HMAC key used to generate the master key
        """
        privkey, chaincode = master_key(seed, seed_key)
        return cls(privkey, chaincode, network, curve=curve)

    @property
    def privkey(self) -> bytes:
        return self._privkey

    @cached_property
    def pubkey(self) -> bytes:
        return self.curve.public_from_private(self._privkey)

    def neutered(self) -> 'ExtendedPublicKey':
        return ExtendedPublicKey(
            self.pubkey,
            self.chaincode,
            self.network,
            self.depth,
            self.child_num,
            self.parent_fingerprint,
            self.curve,
        )

    def _derive_child(self, i: int) -> 'ExtendedPrivateKey':
        privkey, chaincode = ckd_priv(self._privkey, self.chaincode, i)
        return ExtendedPrivateKey(privkey, chaincode, self.network, self.depth + 1, i, self.fingerprint_int, self.curve)

    def sign(self, message: bytes) -> bytes:
        return self.curve.sign(message, self.pubkey, self._privkey)

    def _key_data(self) -> bytes:
        return self._privkey


class ExtendedPublicKey(ExtendedKey):
    """
    A neutered extended key holding only an ed25519 public key.
    """

    def __init__(
        self,
        pubkey: bytes,
        chaincode: bytes,
        network: Network = Network.MAIN,
        depth: int = 0,
        child_num: int = 0,
        parent_fingerprint: int = 0,
        curve: Ed25519Curve = CATAPULT,
    ) -> None:
        """
        :param pubkey: The 32 byte encoded public point
        """
        if len(pubkey) != KEY_SIZE:
            raise InvalidLengthError(f"Public key must be {KEY_SIZE} bytes, got {len(pubkey)}")
        if not curve.is_valid_point(pubkey):
            raise InvalidPublicKeyError("Public key is not a valid ed25519 point")
        ExtendedKey.__init__(self, chaincode, network, depth, child_num, parent_fingerprint, curve)
        self._pubkey = bytes(pubkey)

    @property
    def pubkey(self) -> bytes:
        return self._pubkey

    def neutered(self) -> 'ExtendedPublicKey':
        return self

    def _derive_child(self, i: int) -> 'ExtendedPublicKey':
        pubkey, chaincode, i = ckd_pub(self._pubkey, self.chaincode, i, self.curve)
        return ExtendedPublicKey(pubkey, chaincode, self.network, self.depth + 1, i, self.fingerprint_int, self.curve)

    def _key_data(self) -> bytes:
        return self._pubkey


def _lookup_version(version: int, network: Optional[Network]) -> Tuple[Network, bool]:
    networks = list(Network) if network is None else [network]
    for net in networks:
        if version == net.private_prefix:
            return net, True
        if version == net.public_prefix:
            return net, False
    expected = " or ".join(f"{net.public_prefix:08x}/{net.private_prefix:08x}" for net in networks)
    raise InvalidVersionError(f"Extended key version {version:08x} is invalid, expected one of {expected}")


def _split_path(path: str) -> Tuple[List[Tuple[int, bool]], bool]:
    if not isinstance(path, str) or PATH_RE.fullmatch(path) is None:
        raise InvalidPathError(f"Invalid BIP32 derivation path provided: {path!r}")

    n = path.split("/")
    from_master = n[0] == "m"
    if from_master:
        n = n[1:]

    segments = []
    for x in n:
        if x.endswith("'"):
            segments.append((int(x[:-1]), True))
        else:
            segments.append((int(x), False))
    return segments, from_master


def parse_path(nstr: str) -> List[int]:
    """
    Convert BIP32 path string to list of uint32 integers with hardened flags.

    e.g.: "m/0'/1" -> [0x80000000, 1]

    :param nstr: path string
    :return: list of integers
    """
    segments, _ = _split_path(nstr)
    path = []
    for i, hardened in segments:
        if hardened:
            if i > HARDENED_FLAG - 1:
                raise IndexOverflowError(f"Hardened index {i} is larger than 2^31 - 1")
            path.append(H_(i))
        else:
            if i > UINT32_MAX:
                raise BadArgumentError(f"Index {i} is not a 32 bit unsigned integer")
            path.append(i)
    return path


def path_to_string(path: Sequence[int], hardened_char: str = "'") -> str:
    """
    Convert a list of indexes to a path string starting at the master key.

    e.g.: [0x80000000, 1] -> "m/0'/1"
    """
    s = "m"
    for i in path:
        hardened = is_hardened(i)
        i &= ~HARDENED_FLAG
        s += "/" + str(i)
        if hardened:
            s += hardened_char
    return s


def encode(key: ExtendedKey) -> str:
    """
    Encode an extended key to its Base58 check string
    """
    return key.to_string()


def decode(s: str, network: Optional[Network] = None, curve: Ed25519Curve = CATAPULT) -> ExtendedKey:
    """
    Decode a Base58 check extended key string, see :meth:`ExtendedKey.deserialize`
    """
    return ExtendedKey.deserialize(s, network, curve)
