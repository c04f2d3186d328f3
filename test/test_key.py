#!/usr/bin/env python3
# Copyright (c) 2026 The edhd developers
# Distributed under the MIT software license, see the accompanying
# file COPYING or http://www.opensource.org/licenses/mit-license.php.

from edhdlib.bip32 import ED25519_SEED_KEY, HARDENED_FLAG, H_
from edhdlib.common import Network
from edhdlib.curve import CATAPULT, ED25519
from edhdlib.errors import (
    BadArgumentError,
    ExpectedMasterNodeError,
    IndexOverflowError,
    InvalidLengthError,
    InvalidMasterNodeError,
    InvalidPathError,
    InvalidPublicKeyError,
    MissingPrivateKeyError,
    UnavailableActionError,
)
from edhdlib.key import (
    ExtendedKey,
    ExtendedPrivateKey,
    ExtendedPublicKey,
    parse_path,
    path_to_string,
)

from binascii import unhexlify
from concurrent.futures import ThreadPoolExecutor
import json
import os
import unittest

CURVES = {
    "catapult": CATAPULT,
    "ed25519": ED25519,
}

class TestExtendedKey(unittest.TestCase):
    @classmethod
    def setUpClass(cls):
        with open(os.path.join(os.path.dirname(os.path.realpath(__file__)), "data/test_vectors.json"), encoding="utf-8") as f:
            cls.data = json.load(f)
        cls.master = ExtendedPrivateKey.from_seed(b"\x00" * 32)

    def get_master(self, name):
        vectors = self.data[name]
        return ExtendedPrivateKey.from_seed(
            unhexlify(vectors["seed"]),
            curve=CURVES[vectors["curve"]],
            seed_key=vectors["seed_key"].encode(),
        )

    def test_from_seed(self):
        self.assertEqual(self.master.privkey.hex(), "475b0a2c3c26b02a06a22cfcab343f6385546fa3b5eafff2cc80d962455088d4")
        self.assertEqual(self.master.chaincode.hex(), "89532c9d7c2bf2ad5e30c5f437f9f0e9b68591141c18db063a1be0836a805807")
        self.assertEqual(self.master.depth, 0)
        self.assertEqual(self.master.child_num, 0)
        self.assertEqual(self.master.parent_fingerprint, 0)
        self.assertEqual(self.master.network, Network.MAIN)
        self.assertIs(self.master.curve, CATAPULT)
        self.assertFalse(self.master.is_neutered())

    def test_derive_path_vectors(self):
        for name in ["slip10_ed25519", "catapult", "catapult_normal"]:
            master = self.get_master(name)
            for vector in self.data[name]["vectors"]:
                with self.subTest(name=name, path=vector["path"]):
                    key = master if vector["path"] == "m" else master.derive_path(vector["path"])
                    if "privkey" in vector:
                        self.assertEqual(key.privkey.hex(), vector["privkey"])
                    if "chaincode" in vector:
                        self.assertEqual(key.chaincode.hex(), vector["chaincode"])
                    self.assertEqual(key.pubkey.hex(), vector["pubkey"])
                    self.assertEqual(key.fingerprint.hex(), vector["fingerprint"])
                    self.assertEqual(key.parent_fingerprint, int(vector["parent_fingerprint"], 16))
                    self.assertEqual(key.depth, vector["depth"])
                    self.assertEqual(key.child_num, vector["child_num"])
                    self.assertEqual(key.to_string(), vector["xprv"])
                    self.assertEqual(key.neutered().to_string(), vector["xpub"])

    def test_public_derivation_vectors(self):
        vectors = self.data["public_derivation"]
        parent = ExtendedKey.deserialize(vectors["parent_xpub"])
        self.assertTrue(parent.is_neutered())
        for vector in vectors["vectors"]:
            with self.subTest(path=vector["path"]):
                for path in [vector["path"], "m/" + vector["path"]]:
                    child = parent.derive_path(path)
                    self.assertIsInstance(child, ExtendedPublicKey)
                    self.assertEqual(child.pubkey.hex(), vector["pubkey"])
                    self.assertEqual(child.to_string(), vector["xpub"])

    def test_neutered_derive_from_private_parent(self):
        # The neutered master derives the same public children whether it was
        # created from the private key or parsed from its xpub
        vectors = self.data["public_derivation"]
        child = self.master.neutered().derive(0)
        self.assertEqual(child.to_string(), vectors["vectors"][0]["xpub"])

    def test_determinism(self):
        path = "m/44'/43'/0'/0'/0'"
        first = self.master.derive_path(path)
        second = ExtendedPrivateKey.from_seed(b"\x00" * 32).derive_path(path)
        self.assertEqual(first, second)
        self.assertEqual(first.privkey, second.privkey)
        self.assertEqual(first.chaincode, second.chaincode)
        self.assertEqual(first.pubkey, second.pubkey)

        xpub = self.master.neutered()
        self.assertEqual(xpub.derive_path("0/1/2"), xpub.derive_path("0/1/2"))

    def test_path_equivalence(self):
        self.assertEqual(self.master.derive_path("m/0'/1"), self.master.derive_hardened(0).derive(1))
        self.assertEqual(self.master.derive_path("0'/1"), self.master.derive(H_(0)).derive(1))
        self.assertEqual(self.master.derive_path("m/0'/1").child_num, 1)

    def test_derive_child_fields(self):
        child = self.master.derive(5)
        self.assertEqual(child.depth, 1)
        self.assertEqual(child.child_num, 5)
        self.assertEqual(child.parent_fingerprint, self.master.fingerprint_int)
        self.assertEqual(child.network, self.master.network)
        self.assertIs(child.curve, self.master.curve)

        grandchild = child.derive_hardened(7)
        self.assertEqual(grandchild.depth, 2)
        self.assertEqual(grandchild.child_num, H_(7))
        self.assertEqual(grandchild.parent_fingerprint, child.fingerprint_int)

    def test_hardened_gating(self):
        xpub = self.master.neutered()
        for i in [HARDENED_FLAG, HARDENED_FLAG + 1, 0xffffffff]:
            with self.subTest(i=i):
                with self.assertRaises(MissingPrivateKeyError):
                    xpub.derive(i)
        with self.assertRaises(MissingPrivateKeyError):
            xpub.derive_hardened(0)
        with self.assertRaises(MissingPrivateKeyError):
            xpub.derive_path("0/1'")
        with self.assertRaises(MissingPrivateKeyError):
            xpub.derive_path("m/44'")

    def test_index_ranges(self):
        with self.assertRaises(IndexOverflowError):
            self.master.derive_hardened(HARDENED_FLAG)
        with self.assertRaises(BadArgumentError):
            self.master.derive_hardened(-1)
        for i in [-1, 1 << 32]:
            with self.subTest(i=i):
                with self.assertRaises(BadArgumentError):
                    self.master.derive(i)
        self.assertEqual(self.master.derive_hardened(HARDENED_FLAG - 1).child_num, 0xffffffff)
        self.assertEqual(self.master.derive(0xffffffff), self.master.derive_hardened(HARDENED_FLAG - 1))

        with self.assertRaises(IndexOverflowError):
            self.master.derive_path("m/2147483648'")
        with self.assertRaises(BadArgumentError):
            self.master.derive_path("m/4294967296")
        # Unmarked indexes past 2^31 - 1 are hardened
        with self.assertRaises(MissingPrivateKeyError):
            self.master.neutered().derive_path("2147483648")

    def test_invalid_paths(self):
        for path in ["", "m", "m/", "M/0", "/0", "0/", "m//0", "a", "m/0''", "m/0h", "m/-1", "0/1 ", " 0", "0\n", "m/0/", "m/١", None]:
            with self.subTest(path=path):
                with self.assertRaises(InvalidPathError):
                    self.master.derive_path(path)

    def test_expected_master_node(self):
        child = self.master.derive(0)
        with self.assertRaises(ExpectedMasterNodeError):
            child.derive_path("m/0")
        with self.assertRaises(ExpectedMasterNodeError):
            child.neutered().derive_path("m/0")
        self.assertEqual(child.derive_path("1"), child.derive(1))

    def test_neutered(self):
        for key in [self.master, self.master.derive_path("m/44'/43'"), self.master.derive_path("0/1")]:
            with self.subTest(key=key):
                neutered = key.neutered()
                self.assertIsInstance(neutered, ExtendedPublicKey)
                self.assertTrue(neutered.is_neutered())
                self.assertIsNone(neutered.privkey)
                self.assertEqual(neutered.pubkey, key.pubkey)
                self.assertEqual(neutered.chaincode, key.chaincode)
                self.assertEqual(neutered.depth, key.depth)
                self.assertEqual(neutered.child_num, key.child_num)
                self.assertEqual(neutered.parent_fingerprint, key.parent_fingerprint)
                self.assertEqual(neutered.fingerprint, key.fingerprint)
                self.assertEqual(neutered.neutered(), neutered)
                self.assertFalse(key.is_neutered())
                self.assertNotEqual(neutered, key)

    def test_private_key_access(self):
        self.assertEqual(self.master.get_privkey(), self.master.privkey)
        with self.assertRaises(MissingPrivateKeyError):
            self.master.neutered().get_privkey()

    def test_sign_verify(self):
        for name in ["signature", "signature_ed25519"]:
            vector = self.data[name]
            curve = CURVES[vector["curve"]]
            master = ExtendedPrivateKey(unhexlify(vector["privkey"]), bytes(32), curve=curve)
            message = unhexlify(vector["message"])
            signature = unhexlify(vector["signature"])
            with self.subTest(name=name):
                self.assertEqual(master.sign(message), signature)
                self.assertTrue(master.verify(message, signature))
                self.assertTrue(master.neutered().verify(message, signature))
                self.assertFalse(master.verify(message + b"\x00", signature))
                self.assertFalse(master.verify(message, signature[:-1]))
                self.assertFalse(master.verify(message, bytes(64)))
                self.assertFalse(master.derive(0).verify(message, signature))

    def test_sign_requires_private_key(self):
        with self.assertRaises(MissingPrivateKeyError):
            self.master.neutered().sign(b"message")

    def test_curves_differ(self):
        ed25519_master = ExtendedPrivateKey(self.master.privkey, self.master.chaincode, curve=ED25519)
        self.assertNotEqual(ed25519_master.pubkey, self.master.pubkey)
        message = b"message"
        self.assertFalse(self.master.verify(message, ed25519_master.sign(message)))

        # Same serialized fields, different keys
        self.assertEqual(ed25519_master.serialize(), self.master.serialize())
        self.assertNotEqual(ed25519_master, self.master)
        self.assertEqual(len({ed25519_master, self.master}), 2)
        self.assertNotEqual(ed25519_master.derive(0), self.master.derive(0))

    def test_outputs_are_bytes(self):
        key = ExtendedPrivateKey(self.master.privkey, self.master.chaincode)
        message = b"message"
        self.assertIs(type(key.pubkey), bytes)
        self.assertIs(type(key.sign(message)), bytes)
        self.assertIs(type(key.neutered().derive(0).pubkey), bytes)
        self.assertIs(type(key.derive(0).pubkey), bytes)

        fingerprint = key.fingerprint
        with self.assertRaises(TypeError):
            key.pubkey[0] ^= 0xff
        self.assertEqual(key.pubkey, self.master.pubkey)
        self.assertEqual(key.fingerprint, fingerprint)
        self.assertEqual(key.neutered().pubkey, self.master.pubkey)

    def test_to_wif(self):
        with self.assertRaises(UnavailableActionError):
            self.master.to_wif()
        with self.assertRaises(UnavailableActionError):
            self.master.neutered().to_wif()

    def test_lazy_public_key(self):
        key = ExtendedPrivateKey(self.master.privkey, self.master.chaincode)
        self.assertNotIn("pubkey", key.__dict__)
        pubkey = key.pubkey
        self.assertEqual(key.__dict__["pubkey"], pubkey)
        self.assertIs(key.pubkey, pubkey)

    def test_lazy_public_key_threads(self):
        key = ExtendedPrivateKey(self.master.privkey, self.master.chaincode)
        with ThreadPoolExecutor(max_workers=8) as executor:
            results = list(executor.map(lambda _: key.pubkey, range(32)))
        self.assertEqual(set(results), {self.master.pubkey})

    def test_immutable(self):
        with self.assertRaises(AttributeError):
            self.master.depth = 1
        with self.assertRaises(AttributeError):
            self.master.chaincode = bytes(32)

    def test_master_invariant(self):
        privkey = self.master.privkey
        chaincode = self.master.chaincode
        with self.assertRaises(InvalidMasterNodeError):
            ExtendedPrivateKey(privkey, chaincode, depth=0, child_num=1)
        with self.assertRaises(InvalidMasterNodeError):
            ExtendedPrivateKey(privkey, chaincode, depth=0, parent_fingerprint=1)
        with self.assertRaises(InvalidMasterNodeError):
            ExtendedPublicKey(self.master.pubkey, chaincode, depth=0, child_num=H_(0))
        ExtendedPrivateKey(privkey, chaincode, depth=1, child_num=0, parent_fingerprint=0)

    def test_field_validation(self):
        privkey = self.master.privkey
        chaincode = self.master.chaincode
        with self.assertRaises(InvalidLengthError):
            ExtendedPrivateKey(privkey[:31], chaincode)
        with self.assertRaises(InvalidLengthError):
            ExtendedPrivateKey(privkey, chaincode + b"\x00")
        with self.assertRaises(InvalidLengthError):
            ExtendedPublicKey(b"\x00" + self.master.pubkey, chaincode)
        with self.assertRaises(InvalidPublicKeyError):
            ExtendedPublicKey(unhexlify(self.data["invalid_point"]), chaincode)
        with self.assertRaises(BadArgumentError):
            ExtendedPrivateKey(privkey, chaincode, depth=256, child_num=1, parent_fingerprint=1)
        with self.assertRaises(BadArgumentError):
            ExtendedPrivateKey(privkey, chaincode, depth=1, child_num=1 << 32, parent_fingerprint=1)
        with self.assertRaises(BadArgumentError):
            ExtendedPrivateKey(privkey, chaincode, depth=1, child_num=1, parent_fingerprint=-1)

    def test_printable_dict(self):
        key = self.master.derive_path("m/44'")
        d = key.get_printable_dict()
        self.assertEqual(d["network"], "main")
        self.assertEqual(d["private"], True)
        self.assertEqual(d["depth"], 1)
        self.assertEqual(d["parent_fingerprint"], self.master.fingerprint.hex())
        self.assertEqual(d["child_num"], H_(44))
        self.assertEqual(d["chaincode"], key.chaincode.hex())
        self.assertEqual(d["privkey"], key.privkey.hex())
        self.assertEqual(d["pubkey"], key.pubkey.hex())

        d = key.neutered().get_printable_dict()
        self.assertEqual(d["private"], False)
        self.assertNotIn("privkey", d)

    def test_repr_hides_secrets(self):
        r = repr(self.master)
        self.assertTrue(r.startswith("ExtendedPrivateKey("))
        self.assertNotIn(self.master.privkey.hex(), r)
        self.assertNotIn(self.master.chaincode.hex(), r)

class TestPath(unittest.TestCase):
    def test_parse_path(self):
        self.assertEqual(parse_path("m/44'/43'/0'/0'/0'"), [H_(44), H_(43), H_(0), H_(0), H_(0)])
        self.assertEqual(parse_path("0'/1"), [H_(0), 1])
        self.assertEqual(parse_path("4294967295"), [0xffffffff])
        with self.assertRaises(InvalidPathError):
            parse_path("m")
        with self.assertRaises(IndexOverflowError):
            parse_path("2147483648'")
        with self.assertRaises(BadArgumentError):
            parse_path("4294967296")

    def test_path_to_string(self):
        self.assertEqual(path_to_string([H_(44), H_(43), 0, 1]), "m/44'/43'/0/1")
        self.assertEqual(path_to_string([H_(0), 1], hardened_char="h"), "m/0h/1")
        self.assertEqual(path_to_string([]), "m")
        path = "m/0'/2147483647'/4294967295"
        self.assertEqual(path_to_string(parse_path(path)), "m/0'/2147483647'/2147483647'")

if __name__ == "__main__":
    unittest.main()
