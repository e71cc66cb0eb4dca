"""
Tests for the sealedenv command line interface.
"""

import json

from click.testing import CliRunner

from sealedenv.__main__ import cli
from sealedenv.crypto import encrypt
from sealedenv.version import PACKAGE_NAME, PACKAGE_VERSION


class TestGroup:
    def test_version(self):
        result = CliRunner().invoke(cli, ["--version"])
        assert result.exit_code == 0
        assert PACKAGE_NAME in result.output
        assert PACKAGE_VERSION in result.output


class TestKeypairCommand:
    def test_text_output(self):
        result = CliRunner().invoke(cli, ["keypair"])
        assert result.exit_code == 0
        lines = result.output.strip().splitlines()
        assert lines[0].startswith("DOTENV_PUBLIC_KEY=")
        assert lines[1].startswith("DOTENV_PRIVATE_KEY=")

    def test_json_output(self):
        result = CliRunner().invoke(cli, ["keypair", "--json-output"])
        assert result.exit_code == 0
        data = json.loads(result.output)
        assert data["status"] == "ok"
        assert set(data["result"]) == {"DOTENV_PUBLIC_KEY", "DOTENV_PRIVATE_KEY"}


class TestCryptCommands:
    """Test encrypt and decrypt round trips through the CLI."""

    def test_encrypt_then_decrypt(self, key_pair):
        runner = CliRunner()
        sealed = runner.invoke(cli, ["encrypt", "hunter2", "-k", key_pair.public_key])
        assert sealed.exit_code == 0
        assert sealed.output.startswith("encrypted:")

        env = {
            "DOTENV_PUBLIC_KEY": key_pair.public_key,
            "DOTENV_PRIVATE_KEY": key_pair.private_key.get_secret_value(),
        }
        opened = runner.invoke(cli, ["decrypt", sealed.output.strip()], env=env)
        assert opened.exit_code == 0
        assert opened.output.strip() == "hunter2"

    def test_encrypt_public_key_from_environment(self, key_pair):
        result = CliRunner().invoke(
            cli, ["encrypt", "value"], env={"DOTENV_PUBLIC_KEY": key_pair.public_key}
        )
        assert result.exit_code == 0
        assert result.output.startswith("encrypted:")

    def test_encrypt_without_key(self):
        result = CliRunner().invoke(cli, ["encrypt", "value"])
        assert result.exit_code != 0
        assert "No public key given" in result.output

    def test_decrypt_without_private_key_json(self, key_pair):
        result = CliRunner().invoke(
            cli,
            ["decrypt", encrypt("x", key_pair.public_key), "--json-output"],
            env={"DOTENV_PUBLIC_KEY": key_pair.public_key},
        )
        assert result.exit_code != 0
        # click reports the abort after the JSON document
        data = json.loads(result.output[: result.output.rindex("}") + 1])
        assert data["status"] == "error"
        assert "DOTENV_PRIVATE_KEY" in data["error"]


class TestLoadCommand:
    def test_load_plain(self, fixtures_dir, tmp_path, monkeypatch):
        monkeypatch.chdir(tmp_path)
        result = CliRunner().invoke(cli, ["load", str(fixtures_dir), "--name", "local.env"])
        assert result.exit_code == 0
        assert result.output.strip() == "APP_ENV=local"

    def test_load_hierarchical_json(self, tmp_path, key_pair, monkeypatch):
        monkeypatch.chdir(tmp_path)
        (tmp_path / ".env").write_text(
            f'DOTENV_PUBLIC_KEY="{key_pair.public_key}"\n'
            f'DB__PASSWORD="{encrypt("hunter2", key_pair.public_key)}"\n'
            "DB__HOST=localhost\n"
        )
        env = {
            "DOTENV_PUBLIC_KEY": key_pair.public_key,
            "DOTENV_PRIVATE_KEY": key_pair.private_key.get_secret_value(),
        }
        result = CliRunner().invoke(
            cli,
            ["load", str(tmp_path), "--hierarchical", "--separator", "__", "--json-output"],
            env=env,
        )
        assert result.exit_code == 0
        data = json.loads(result.output)
        assert data["result"]["DB"] == {"PASSWORD": "hunter2", "HOST": "localhost"}

    def test_load_without_key_fails(self, fixtures_dir, tmp_path, monkeypatch):
        monkeypatch.chdir(tmp_path)
        result = CliRunner().invoke(cli, ["load", str(fixtures_dir)])
        assert result.exit_code != 0
        assert "Environment variable not found" in result.output

    def test_load_no_decrypt(self, fixtures_dir, tmp_path, monkeypatch):
        monkeypatch.chdir(tmp_path)
        result = CliRunner().invoke(cli, ["load", str(fixtures_dir), "--no-decrypt"])
        assert result.exit_code == 0
        assert 'DB_HOST=encrypted:' in result.output

    def test_load_missing_directory(self, tmp_path, monkeypatch):
        monkeypatch.chdir(tmp_path)
        result = CliRunner().invoke(cli, ["load", str(tmp_path / "nowhere")])
        assert result.exit_code != 0
        assert "Unable to read any of the environment file(s)" in result.output
