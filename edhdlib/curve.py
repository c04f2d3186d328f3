"""
Ed25519 Curve Engine
********************

Curve operations needed by ed25519 extended keys, built on the Edwards curve support of the ``ecdsa`` package.

The engine is parameterized by the hash function used for key expansion and signatures.
:data:`CATAPULT` uses SHA3-512 like NEM Catapult keys, :data:`ED25519` uses SHA-512 as in RFC 8032 and SLIP-10.
"""

from ecdsa import BadSignatureError, eddsa, ellipticcurve
from ecdsa.errors import MalformedPointError

from typing import Callable, Optional

from .common import sha3_hasher, sha512
from .errors import BadArgumentError


KEY_SIZE = 32
SIGNATURE_SIZE = 64


class Ed25519Curve(object):
    """
    ed25519 with a configurable 64 byte hash function.
    """

    def __init__(self, hash_func: Callable[[bytes], bytes], name: str) -> None:
        """
        :param hash_func: Function hashing bytes into a 64 byte digest
        :param name: Name of this variant, used for display only
        """
        self.name = name
        self.hash_func = hash_func
        base = eddsa.curve_ed25519
        g = eddsa.generator_ed25519
        self.curve = ellipticcurve.CurveEdTw(base.p(), base.a(), base.d(), base.cofactor(), hash_func)
        self.generator = ellipticcurve.PointEdwards(
            self.curve, g.x(), g.y(), 1, g.x() * g.y() % base.p(), g.order(), generator=True
        )

    def __repr__(self) -> str:
        return f"Ed25519Curve({self.name})"

    def _signing_key(self, privkey: bytes) -> eddsa.PrivateKey:
        return eddsa.PrivateKey(self.generator, privkey)

    def _point(self, pubkey: bytes) -> ellipticcurve.PointEdwards:
        return ellipticcurve.PointEdwards.from_bytes(self.curve, pubkey)

    def public_from_private(self, privkey: bytes) -> bytes:
        """
        Compute the public key of a 32 byte private key.

        :param privkey: The private key seed
        :return: The 32 byte encoded public point
        """
        return bytes(self._signing_key(privkey).public_key().public_key())

    def is_valid_point(self, pubkey: bytes) -> bool:
        """
        Check whether ``pubkey`` is the encoding of a point on the curve.
        """
        if len(pubkey) != KEY_SIZE:
            return False
        try:
            self._point(pubkey)
        except MalformedPointError:
            return False
        return True

    def point_add(self, pubkey: bytes, scalar_seed: bytes) -> Optional[bytes]:
        """
        Add the public point of the key generated from ``scalar_seed`` to ``pubkey``.

        :param pubkey: The encoded point to add to
        :param scalar_seed: A 32 byte private key whose public point is added
        :return: The encoded resulting point, or None if the result is the identity
        """
        tweak = self._signing_key(scalar_seed).public_key().point
        result = self._point(pubkey) + tweak
        if result == ellipticcurve.INFINITY:
            return None
        return bytes(result.to_bytes())

    def sign(self, message: bytes, pubkey: bytes, privkey: bytes) -> bytes:
        """
        Create a 64 byte signature over ``message``.

        :param message: The message to sign
        :param pubkey: The public key of ``privkey``
        :param privkey: The private key to sign with
        :return: The signature
        """
        signing_key = self._signing_key(privkey)
        if bytes(signing_key.public_key().public_key()) != pubkey:
            raise BadArgumentError("Public key does not belong to the private key")
        return bytes(signing_key.sign(message))

    def verify(self, message: bytes, pubkey: bytes, signature: bytes) -> bool:
        """
        Verify a signature over ``message``.

        :return: True for a valid signature, False otherwise
        """
        if len(signature) != SIGNATURE_SIZE or not self.is_valid_point(pubkey):
            return False
        try:
            return eddsa.PublicKey(self.generator, pubkey).verify(message, signature)
        except (BadSignatureError, ValueError, MalformedPointError):
            return False


CATAPULT = Ed25519Curve(sha3_hasher(64), "catapult")
ED25519 = Ed25519Curve(sha512, "ed25519")
