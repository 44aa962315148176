"""
Unit tests for the run module.
"""

import json
import pytest
from unittest.mock import patch

from eosio_did_resolver.constants import EXIT_SUCCESS, EXIT_FAILURE
from eosio_did_resolver.run import main, list_chains, resolve_did_document, parse_args

from conftest import TELOS_CHAIN_ID

SUCCESS_RESULT = {
    "didResolutionMetadata": {"contentType": "application/did+ld+json"},
    "didDocument": {"id": "did:eosio:eos:eoscanadacom", "verificationMethod": []},
    "didDocumentMetadata": {},
}
ERROR_RESULT = {
    "didResolutionMetadata": {"error": "notFound"},
    "didDocument": None,
    "didDocumentMetadata": {},
}


def test_parse_args_resolve():
    args = parse_args(["-v", "resolve", "did:eosio:eos:eoscanadacom", "--timeout", "5"])
    assert args.command == "resolve"
    assert args.did == "did:eosio:eos:eoscanadacom"
    assert args.timeout == 5.0
    assert args.verbose is True

def test_parse_args_requires_command():
    with pytest.raises(SystemExit):
        parse_args([])


@patch('eosio_did_resolver.run.resolve')
def test_main_resolve_success(mock_resolve, capsys):
    mock_resolve.return_value = SUCCESS_RESULT

    exit_code = main(["resolve", "did:eosio:eos:eoscanadacom"])

    assert exit_code == EXIT_SUCCESS
    assert json.loads(capsys.readouterr().out) == SUCCESS_RESULT
    mock_resolve.assert_called_once_with("did:eosio:eos:eoscanadacom", options={})


@patch('eosio_did_resolver.run.resolve')
def test_main_resolve_error_result(mock_resolve, capsys):
    mock_resolve.return_value = ERROR_RESULT

    exit_code = main(["resolve", "did:eosio:eos:unknownacc"])

    assert exit_code == EXIT_FAILURE
    assert json.loads(capsys.readouterr().out)["didResolutionMetadata"] == {"error": "notFound"}


@patch('eosio_did_resolver.run.resolve')
def test_resolve_did_document_with_options(mock_resolve, tmp_path):
    mock_resolve.return_value = SUCCESS_RESULT
    registry_file = tmp_path / "registry.json"
    registry_file.write_text(json.dumps({
        "local": {"chainId": "a" * 64, "service": []}
    }))
    output_file = tmp_path / "result.json"

    result = resolve_did_document(
        "did:eosio:local:someaccount",
        registry_file=str(registry_file),
        timeout=4,
        output_file=str(output_file)
    )

    assert result == SUCCESS_RESULT
    assert json.loads(output_file.read_text()) == SUCCESS_RESULT
    _, kwargs = mock_resolve.call_args
    assert kwargs["options"]["timeout"] == 4
    assert kwargs["options"]["eosio_chain_registry"]["local"].chainId == "a" * 64


def test_main_bad_registry_file(tmp_path, capsys):
    registry_file = tmp_path / "registry.json"
    registry_file.write_text("{ nope")

    exit_code = main(["--registry", str(registry_file), "resolve", "did:eosio:eos:eoscanadacom"])

    assert exit_code == EXIT_FAILURE
    assert "ConfigurationError" in json.loads(capsys.readouterr().out)["error"]


def test_list_chains():
    chains = list_chains()
    assert chains["telos"] == {
        "chainId": TELOS_CHAIN_ID,
        "endpoints": ["https://telos.greymass.com"],
    }


def test_main_chains(capsys):
    exit_code = main(["chains"])

    assert exit_code == EXIT_SUCCESS
    assert "eos:testnet:jungle" in json.loads(capsys.readouterr().out)


@patch('eosio_did_resolver.run.resolve')
def test_main_unexpected_error(mock_resolve, capsys):
    mock_resolve.side_effect = RuntimeError("boom")

    exit_code = main(["resolve", "did:eosio:eos:eoscanadacom"])

    assert exit_code == EXIT_FAILURE
    assert "Unexpected error: boom" in json.loads(capsys.readouterr().out)["error"]
