"""Configuration for pytest"""

import pytest
import logging

from eosio_did_resolver.chain_registry import load_default_registry
from eosio_did_resolver.constants import ENV_CHAIN_REGISTRY, ENV_RPC_TIMEOUT
from eosio_did_resolver.errors import ChainRpcError

JUNGLE_KEY = "PUB_K1_7ueKyvQJpBLVjuNgLedAgJakw3bLyd4GBx1N4jXswpBhE5SbJK"
JUNGLE_KEY_X = "jbXSqQffgSNrtF4SBriENexUuXstjPDRFV_3PRCFU7o"
JUNGLE_KEY_Y = "J20YqTFJgZ3P5KXZBEcOmWX-Nxaqogtt4NyWtvx8Ryk"

TELOS_KEY = "PUB_K1_6Bj319bz279z7svm219K3sGMSyupYTxSHS4twhQuys5LVkdvT7"
TELOS_KEY_X = "qtURTt2310JSW5rcRbGOIzIEJw_Hkya1wYtiOfPH5bQ"
TELOS_KEY_Y = "IwCoN7GZWkNNKyyhG82iSclXM0kIVVHiwBKcXvMXmCo"

DELPHI_KEY = "PUB_K1_5WJAkq8dQULikFHKM8ZJRTRZsi5hXHXJ2mGJwhdCn9jACeiXEd"
BLACKLIST_KEY = "PUB_K1_7idX86zQ6M3mrzkGQ9MGHf4btSECmcTj4i8Le59ga7CpLxRu4s"

TELOS_CHAIN_ID = "4667b205c6838ef70ff7988f6e8257e8be0e1284a2f59699054a018f743b1d11"


def make_permission(name, parent, threshold, keys=(), accounts=()):
    """get_account style permission; accounts are (actor, permission, weight)."""
    return {
        "perm_name": name,
        "parent": parent,
        "required_auth": {
            "threshold": threshold,
            "keys": [{"key": key, "weight": weight} for key, weight in keys],
            "accounts": [
                {"permission": {"actor": actor, "permission": permission}, "weight": weight}
                for actor, permission, weight in accounts
            ],
            "waits": [],
        },
    }


def make_account(name, permissions):
    return {
        "account_name": name,
        "head_block_num": 123456,
        "privileged": False,
        "ram_quota": 8150,
        "permissions": permissions,
    }


@pytest.fixture(autouse=True)
def setup_logging():
    logging.basicConfig(
        level=logging.DEBUG,
        format='%(levelname)s - %(name)s - %(message)s'
    )

    logging.getLogger('urllib3').setLevel(logging.WARNING)

    return logging.getLogger()


@pytest.fixture(autouse=True)
def clean_environment(monkeypatch):
    monkeypatch.delenv(ENV_CHAIN_REGISTRY, raising=False)
    monkeypatch.delenv(ENV_RPC_TIMEOUT, raising=False)


@pytest.fixture
def default_registry():
    return load_default_registry()


@pytest.fixture
def lioninjungle_account():
    return make_account("lioninjungle", [
        make_permission("active", "owner", 1, keys=[(JUNGLE_KEY, 1)]),
        make_permission("owner", "", 1, keys=[(JUNGLE_KEY, 1)]),
    ])


@pytest.fixture
def caleosblocks_account():
    return make_account("caleosblocks", [
        make_permission("active", "owner", 1, keys=[(TELOS_KEY, 1)]),
        make_permission("delphi", "active", 1, keys=[(DELPHI_KEY, 1)]),
        make_permission("owner", "", 1, keys=[(TELOS_KEY, 1)]),
    ])


@pytest.fixture
def eoscanadacom_account():
    return make_account("eoscanadacom", [
        make_permission("active", "owner", 4, accounts=[
            ("eoscanadaaaa", "active", 2),
            ("eoscanadaaab", "active", 2),
            ("eoscanadaaaf", "active", 1),
        ]),
        make_permission("blacklistops", "active", 1, keys=[(BLACKLIST_KEY, 1)]),
        make_permission("day2day", "active", 1, keys=[(DELPHI_KEY, 1)], accounts=[
            ("eoscanadaaaa", "active", 1),
            ("eoscanadaaac", "owner", 1),
        ]),
        make_permission("owner", "", 5, accounts=[
            ("eoscanadaaaa", "active", 2),
            ("eoscanadaaab", "active", 2),
            ("eoscanadaaac", "active", 2),
        ]),
    ])


@pytest.fixture
def fake_chain():
    """
    Builds a fetch capability backed by a dict of account name -> response.

    Unknown accounts fail the way an API node does, with an RPC error.
    Every call is recorded in ``fetch.calls``.
    """
    def factory(accounts):
        calls = []

        def fetch(endpoint, account_name):
            calls.append((endpoint, account_name))
            if account_name not in accounts:
                raise ChainRpcError(f"unknown key: {account_name}", endpoint=endpoint)
            return accounts[account_name]

        fetch.calls = calls
        return fetch

    return factory
