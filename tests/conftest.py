import logging
from pathlib import Path

import pytest
from eth_utils import to_checksum_address
from web3.exceptions import TimeExhausted

from token_deployer.config.abis import TESTNET_ERC20_ABI
from token_deployer.config.logging_config import ROOT_LOGGER_NAME
from token_deployer.config.settings import DeployConfig
from token_deployer.setup.accounts import derive_deployer, derive_test_roster
from token_deployer.setup.artifacts import TESTNET_ERC20_CONTRACT, ContractCode
from token_deployer.setup.context import DeployContext

# Public Hardhat/Anvil development mnemonic
TEST_MNEMONIC = "test test test test test test test test test test test junk"
DEPLOYER_MNEMONIC = "abandon abandon abandon abandon abandon abandon abandon abandon abandon abandon abandon about"

HARDHAT_ACCOUNT_0 = "0xf39Fd6e51aad88F6F4ce6aB8827279cffFb92266"
HARDHAT_ACCOUNT_1 = "0x70997970C51812dc3A010C7d01b50e0d17dc79C8"
HARDHAT_ACCOUNT_2 = "0x3C44CdDdB6a900fa2b585dd299e03d12FA4293BC"

DUMMY_BYTECODE = "0x6080604052"


class _Built:
    """Stands in for a web3 ContractConstructor / ContractFunction."""

    def __init__(self, chain, intent):
        self._chain = chain
        self._intent = intent

    def build_transaction(self, params):
        return self._chain.queue(self._intent, params)


class _Functions:
    def __init__(self, chain, address):
        self._chain = chain
        self._address = address

    def mint(self, to, amount):
        return _Built(self._chain, {"kind": "mint", "token": self._address, "to": to, "amount": amount})


class FakeToken:
    def __init__(self, chain, address):
        self.address = address
        self.functions = _Functions(chain, address)


class FakeFactory:
    def __init__(self, chain):
        self._chain = chain

    def constructor(self, name, symbol, decimals):
        return _Built(self._chain, {"kind": "deploy", "args": (name, symbol, decimals)})


class FakeEth:
    """Minimal ``w3.eth`` for a single-writer dev chain.

    Transactions must be built, sent and awaited one at a time; sending while
    another built transaction is queued fails the test. A transaction that is
    never mined (timeout switches, or a nonce gap with ``strict_nonces``) gets
    no receipt, and waiting for it raises ``TimeExhausted``.
    """

    def __init__(self, chain_id=1337, gas_price=10**9, base_fee=None, strict_nonces=False):
        self.chain_id = chain_id
        self.gas_price = gas_price
        self.base_fee = base_fee
        self.strict_nonces = strict_nonces
        self.tx_counts = {}
        self.balances = {}
        self.sent = []
        self.receipts = {}
        self.reject_deploy_symbols = set()
        self.revert_deploy_symbols = set()
        self.revert_mints_to = set()
        self.timeout_deploy_symbols = set()
        self.timeout_mints_to = set()
        self._pending = []
        self._deployed = 0

    # --- reads -------------------------------------------------------------
    def get_transaction_count(self, address, block_identifier="latest"):
        return self.tx_counts.get(to_checksum_address(address), 0)

    def get_block(self, block_identifier):
        if self.base_fee is None:
            return {"number": 1}
        return {"number": 1, "baseFeePerGas": self.base_fee}

    def contract(self, address=None, abi=None, bytecode=None):
        if address is None:
            return FakeFactory(self)
        return FakeToken(self, address)

    def balance_of(self, token, holder):
        return self.balances.get((token, to_checksum_address(holder)), 0)

    # --- writes ------------------------------------------------------------
    def queue(self, intent, params):
        tx = dict(params)
        tx.setdefault("value", 0)
        tx["data"] = "0x" + f"{len(self.sent) + len(self._pending) + 1:08x}"
        if intent["kind"] == "mint":
            tx["to"] = intent["token"]
        self._pending.append((intent, dict(tx)))
        return tx

    def send_raw_transaction(self, raw):
        assert len(self._pending) == 1, "transactions must be sent one at a time"
        intent, tx = self._pending.pop()
        sender = to_checksum_address(tx["from"])
        nonce = tx["nonce"]
        if nonce < self.tx_counts.get(sender, 0):
            raise ValueError("nonce too low")
        if intent["kind"] == "deploy" and intent["args"][1] in self.reject_deploy_symbols:
            raise ValueError("insufficient funds for gas * price + value")

        tx_hash = (len(self.sent) + 1).to_bytes(32, "big")
        if self._never_mined(intent, nonce, self.tx_counts.get(sender, 0)):
            self.sent.append({**intent, "nonce": nonce, "raw": raw})
            return tx_hash
        self.tx_counts[sender] = nonce + 1

        status = 1
        receipt = {"transactionHash": tx_hash, "gasUsed": 21000, "contractAddress": None}
        if intent["kind"] == "deploy":
            if intent["args"][1] in self.revert_deploy_symbols:
                status = 0
            else:
                self._deployed += 1
                receipt["contractAddress"] = "0x" + f"{0xC0DE0000 + self._deployed:040x}"
        else:
            to = to_checksum_address(intent["to"])
            if to in self.revert_mints_to:
                status = 0
            else:
                key = (intent["token"], to)
                self.balances[key] = self.balances.get(key, 0) + intent["amount"]
        receipt["status"] = status
        self.receipts[tx_hash] = receipt
        self.sent.append({**intent, "nonce": nonce, "raw": raw})
        return tx_hash

    def _never_mined(self, intent, nonce, count):
        if self.strict_nonces and nonce > count:
            return True
        if intent["kind"] == "deploy":
            return intent["args"][1] in self.timeout_deploy_symbols
        return to_checksum_address(intent["to"]) in self.timeout_mints_to

    def wait_for_transaction_receipt(self, tx_hash, timeout=120):
        if tx_hash not in self.receipts:
            raise TimeExhausted(f"Transaction {tx_hash.hex()} is not in the chain after {timeout} seconds")
        return self.receipts[tx_hash]

    # --- helpers for assertions --------------------------------------------
    def nonces(self, kind=None):
        return [s["nonce"] for s in self.sent if kind is None or s["kind"] == kind]


class FakeWeb3:
    def __init__(self, **kwargs):
        self.eth = FakeEth(**kwargs)


@pytest.fixture(autouse=True)
def _reset_package_logger():
    yield
    logger = logging.getLogger(ROOT_LOGGER_NAME)
    for handler in list(logger.handlers):
        logger.removeHandler(handler)


@pytest.fixture
def config(tmp_path: Path) -> DeployConfig:
    return DeployConfig(
        rpc_url="http://127.0.0.1:8545",
        deployer_mnemonic=DEPLOYER_MNEMONIC,
        test_mnemonic=TEST_MNEMONIC,
        artifacts_dir=tmp_path,
    )


@pytest.fixture
def fake_w3() -> FakeWeb3:
    return FakeWeb3()


@pytest.fixture
def ctx(config, fake_w3) -> DeployContext:
    return DeployContext(
        config=config,
        w3=fake_w3,
        deployer=derive_deployer(config),
        roster=derive_test_roster(config),
        contract=ContractCode(name=TESTNET_ERC20_CONTRACT, abi=TESTNET_ERC20_ABI, bytecode=DUMMY_BYTECODE),
    )


@pytest.fixture
def clean_env(monkeypatch):
    for name in (
        "RPC_URL",
        "ETH_CLIENT_WEB3_URL",
        "DEPLOYER_MNEMONIC",
        "TEST_MNEMONIC",
        "DEPLOYER_INDEX",
        "TEST_ROSTER_SIZE",
        "HD_PATH_TEMPLATE",
        "ARTIFACTS_DIR",
        "DEPLOY_GAS_LIMIT",
        "MINT_GAS_LIMIT",
        "DEPLOY_NONCE_OFFSET",
        "RECEIPT_TIMEOUT",
        "TEST_CONFIG_PATH",
        "ZKSYNC_HOME",
        "LOG_DIR",
    ):
        monkeypatch.delenv(name, raising=False)
    return monkeypatch
