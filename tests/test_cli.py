"""Tests for CLI subcommands."""

import json
from unittest.mock import MagicMock

import pytest

from conftest import TEST_ADDRESS_1, TEST_ADDRESS_2, TEST_API_KEY, TEST_KEY_1, TEST_KEY_2, TEST_MNEMONIC
from netresolve.cli import (
    CLIContext,
    cmd_accounts,
    cmd_local,
    cmd_network,
    cmd_networks,
    create_parser,
    run_cli,
)
from netresolve.config import ResolverConfig


class TestCreateParser:
    """Tests for argument parser creation."""

    def test_subcommands(self):
        """Parser has networks, network, local and accounts subcommands."""
        parser = create_parser()

        assert parser.parse_args(["networks"]).command == "networks"
        assert parser.parse_args(["local"]).command == "local"

        args = parser.parse_args(["network", "mainnet"])
        assert args.command == "network"
        assert args.name == "mainnet"

        args = parser.parse_args(["accounts", "--count", "3"])
        assert args.command == "accounts"
        assert args.count == 3

    def test_accounts_default_count(self):
        """accounts derives 20 accounts by default."""
        assert create_parser().parse_args(["accounts"]).count == 20

    def test_global_flags(self):
        """Parser accepts --json, --env-file and --fork."""
        args = create_parser().parse_args(
            ["--json", "--env-file", "ci.env", "--fork", "hedera", "local"]
        )

        assert args.json is True
        assert args.env_file == "ci.env"
        assert args.fork == "hedera"

    def test_no_command(self):
        """No subcommand leaves command unset."""
        assert create_parser().parse_args([]).command is None


class TestCLIContext:
    """Tests for CLI context."""

    def test_context_stores_config(self, keys_config):
        """Context stores config and flags."""
        ctx = CLIContext(keys_config, json_output=True)
        assert ctx.config is keys_config
        assert ctx.json_output is True

    def test_resolved_is_cached(self, keys_config):
        """Assembly runs once per context."""
        ctx = CLIContext(keys_config)
        assert ctx.resolved is ctx.resolved

    def test_output_json(self, keys_config, capsys):
        """Output in JSON format."""
        ctx = CLIContext(keys_config, json_output=True)
        ctx.output({"foo": "bar", "num": 1})

        data = json.loads(capsys.readouterr().out)
        assert data == {"foo": "bar", "num": 1}

    def test_output_text(self, keys_config, capsys):
        """Output in human-readable format."""
        ctx = CLIContext(keys_config)
        ctx.output({"outer": {"inner": "value"}, "items": [{"a": 1}]})

        out = capsys.readouterr().out
        assert "outer:" in out
        assert "  inner: value" in out
        assert "  a: 1" in out


class TestNetworkCommands:
    """Tests for network inspection commands."""

    def test_networks(self, keys_config, capsys):
        """networks lists every network with masked URLs."""
        ctx = CLIContext(keys_config, json_output=True)

        assert cmd_networks(ctx) == 0

        data = json.loads(capsys.readouterr().out)
        assert data["mainnet"] == {"chain_id": 1, "url": "https://mainnet.infura.io/v3/**********"}
        assert data["hardhat"]["chain_id"] == 31337
        assert TEST_API_KEY not in json.dumps(data)

    def test_network(self, keys_config, capsys):
        """network shows one entry with masked secrets."""
        ctx = CLIContext(keys_config, json_output=True)

        assert cmd_network(ctx, "bsc") == 0

        data = json.loads(capsys.readouterr().out)
        assert data["bsc"]["chainId"] == 56
        assert data["bsc"]["url"] == "https://bsc-dataseed.bnbchain.org"
        assert TEST_KEY_1 not in json.dumps(data)

    def test_unknown_network(self, keys_config, capsys):
        """Unknown network names report an error."""
        ctx = CLIContext(keys_config, json_output=True)

        assert cmd_network(ctx, "dogechain") == 1

        data = json.loads(capsys.readouterr().out)
        assert "dogechain" in data["error"]

    def test_missing_credentials(self, make_config, capsys):
        """Resolver errors are reported, not raised."""
        ctx = CLIContext(make_config(INFURA_API_KEY=TEST_API_KEY), json_output=True)

        assert cmd_networks(ctx) == 1

        data = json.loads(capsys.readouterr().out)
        assert "No signer credentials" in data["error"]

    def test_local_not_forked(self, keys_config, capsys):
        """local shows the unforked local chain."""
        ctx = CLIContext(keys_config, json_output=True)

        assert cmd_local(ctx) == 0

        data = json.loads(capsys.readouterr().out)
        assert data["hardhat"]["chainId"] == 31337
        assert data["hardhat"]["forked"] is False
        assert "forking" not in data["hardhat"]

    def test_local_forked_masks_url(self, make_config, capsys):
        """Forking URLs hide the API key."""
        config = make_config(
            MNEMONIC=TEST_MNEMONIC,
            INFURA_API_KEY=TEST_API_KEY,
            NETRESOLVE_FORK_CHAIN="mainnet",
        )
        ctx = CLIContext(config, json_output=True)

        assert cmd_local(ctx) == 0

        data = json.loads(capsys.readouterr().out)
        assert data["hardhat"]["chainId"] == 1
        assert data["hardhat"]["forking"] == {"url": "https://mainnet.infura.io/v3/**********"}

    def test_local_non_decimal_fork_target(self, make_config, capsys):
        """A fork target of digit-like characters reports an error."""
        config = make_config(
            MNEMONIC=TEST_MNEMONIC,
            INFURA_API_KEY=TEST_API_KEY,
            NETRESOLVE_FORK_CHAIN="\u00b2",
        )
        ctx = CLIContext(config, json_output=True)

        assert cmd_local(ctx) == 1

        data = json.loads(capsys.readouterr().out)
        assert "Invalid fork target" in data["error"]


class TestAccountsCommand:
    """Tests for the accounts command."""

    def test_discrete_keys(self, keys_config, capsys):
        """Discrete keys list two addresses."""
        ctx = CLIContext(keys_config, json_output=True)

        assert cmd_accounts(ctx) == 0

        data = json.loads(capsys.readouterr().out)
        assert data == {"mode": "discrete_keys", "accounts": [TEST_ADDRESS_1, TEST_ADDRESS_2]}

    def test_mnemonic(self, mnemonic_config, capsys):
        """Mnemonic lists derived addresses."""
        ctx = CLIContext(mnemonic_config, json_output=True)

        assert cmd_accounts(ctx, count=2) == 0

        data = json.loads(capsys.readouterr().out)
        assert data == {"mode": "mnemonic", "accounts": [TEST_ADDRESS_1, TEST_ADDRESS_2]}

    def test_invalid_count(self, mnemonic_config, capsys):
        """Invalid counts report an error."""
        ctx = CLIContext(mnemonic_config, json_output=True)

        assert cmd_accounts(ctx, count=0) == 1

        assert "positive" in json.loads(capsys.readouterr().out)["error"]


class TestRunCli:
    """Tests for command routing."""

    @pytest.fixture(autouse=True)
    def env(self, monkeypatch):
        """Provide credentials through the environment."""
        monkeypatch.setenv("PRIVATE_KEY_1", TEST_KEY_1)
        monkeypatch.setenv("PRIVATE_KEY_2", TEST_KEY_2)
        monkeypatch.setenv("INFURA_API_KEY", TEST_API_KEY)
        monkeypatch.setenv("NETRESOLVE_LOG_LEVEL", "WARNING")

    def _args(self, *argv):
        return create_parser().parse_args(list(argv))

    def test_no_command_signals_help(self):
        """No command returns -1."""
        assert run_cli(self._args()) == -1

    def test_routes_network(self, capsys):
        """network routes to cmd_network."""
        assert run_cli(self._args("--json", "network", "sepolia")) == 0

        data = json.loads(capsys.readouterr().out)
        assert data["sepolia"]["chainId"] == 11155111

    def test_fork_flag_overrides_env(self, monkeypatch, capsys):
        """--fork overrides the configured fork target."""
        monkeypatch.setenv("NETRESOLVE_FORK_CHAIN", "mainnet")

        assert run_cli(self._args("--json", "--fork", "hedera", "local")) == 0

        data = json.loads(capsys.readouterr().out)
        assert data["hardhat"]["chainId"] == 295

    def test_env_file(self, tmp_path, monkeypatch, capsys):
        """--env-file loads the given dotenv file."""
        monkeypatch.delenv("PRIVATE_KEY_1")
        monkeypatch.delenv("PRIVATE_KEY_2")
        env_file = tmp_path / "ci.env"
        env_file.write_text(f"MNEMONIC={TEST_MNEMONIC}\n")

        assert run_cli(self._args("--json", "--env-file", str(env_file), "accounts", "--count", "1")) == 0

        data = json.loads(capsys.readouterr().out)
        assert data == {"mode": "mnemonic", "accounts": [TEST_ADDRESS_1]}

    def test_configuration_error(self, monkeypatch, capsys):
        """Invalid settings report a configuration error."""
        monkeypatch.setenv("NETRESOLVE_API_KEY_POLICY", "sometimes")

        assert run_cli(self._args("--json", "networks")) == 1

        data = json.loads(capsys.readouterr().out)
        assert data["error"].startswith("Configuration error")

    def test_invalid_log_level(self, monkeypatch, capsys):
        """An invalid log level is a configuration error."""
        monkeypatch.setenv("NETRESOLVE_LOG_LEVEL", "LOUD")

        assert run_cli(self._args("networks")) == 1

        assert "Invalid log level" in capsys.readouterr().err

    def test_unknown_command(self, capsys):
        """An unrecognized command prints usage."""
        args = MagicMock(command="bogus", env_file=None, fork=None, json=False)

        assert run_cli(args) == 1
        assert "Usage" in capsys.readouterr().err

    def test_config_type(self):
        """The CLI builds ResolverConfig from the environment."""
        ctx = CLIContext(ResolverConfig())
        assert ctx.config.private_key_1.get_secret_value() == TEST_KEY_1
