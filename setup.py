# -*- coding: utf-8 -*-
from setuptools import setup

packages = \
['edhdlib']

package_data = \
{'': ['*']}

install_requires = \
['ecdsa>=0.18,<1',
 'pycryptodome>=3.15,<4.0']

setup_kwargs = {
    'name': 'edhd',
    'version': '0.2.0',
    'description': 'A library for BIP 32 style hierarchical deterministic ed25519 keys',
    'long_description': "# ed25519 Hierarchical Deterministic Keys\n\nedhd is a Python library (`edhdlib`) that derives trees of ed25519 signing keys from a single seed,\nfollowing BIP 32 and the SLIP-10 proposal for ed25519.\nNodes of the tree can be serialized to and from the `xprv`/`xpub` extended key format.\n\nTwo curve engines are provided: `CATAPULT`, which hashes with SHA3-512 like NEM Catapult keys, and `ED25519`, which hashes with SHA-512 as in RFC 8032.\n\n## Install\n\n```\npip3 install .\n```\n\n## Usage\n\n```python\nfrom edhdlib import ExtendedPrivateKey\n\nmaster = ExtendedPrivateKey.from_seed(seed)\nkey = master.derive_path(\"m/44'/43'/0'/0'/0'\")\nsignature = key.sign(b\"message\")\nxpub = key.neutered().to_string()\n```\n\n## Tests\n\n```\ncd test\n./run_tests.py\n```\n",
    'long_description_content_type': 'text/markdown',
    'author': 'None',
    'author_email': 'None',
    'maintainer': 'None',
    'maintainer_email': 'None',
    'url': 'None',
    'packages': packages,
    'package_data': package_data,
    'install_requires': install_requires,
    'python_requires': '>=3.8,<4.0',
}


setup(**setup_kwargs)
