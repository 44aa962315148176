#!/usr/bin/env python3
"""Command-line entry point for the did:eosio resolver."""

import argparse
import json
import logging
import sys
from typing import Dict, Any, Optional

from .chain_registry import build_registry, load_registry_file
from .constants import EXIT_SUCCESS, EXIT_FAILURE
from .errors import EosioDidError
from .resolver import resolve

logger = logging.getLogger(__name__)

def setup_logging(verbose: bool = False) -> None:
    """Configure logging for the application."""
    log_level = logging.DEBUG if verbose else logging.INFO
    logging.basicConfig(
        level=log_level,
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s',
        stream=sys.stderr
    )
    logging.getLogger('urllib3').setLevel(logging.WARNING)


def parse_args(argv: Optional[list] = None) -> argparse.Namespace:
    """Parse command line arguments."""
    parser = argparse.ArgumentParser(description="did:eosio resolver")
    parser.add_argument('--verbose', '-v', action='store_true', help='Enable verbose logging')
    parser.add_argument('--registry', help='Chain registry JSON file merged over the built-in chains')

    subparsers = parser.add_subparsers(dest='command', required=True, help='Command to execute')

    resolve_parser = subparsers.add_parser('resolve', help='Resolve a DID to its document')
    resolve_parser.add_argument('did', help='DID to resolve')
    resolve_parser.add_argument('--timeout', type=float, help='RPC timeout in seconds')
    resolve_parser.add_argument('--output', '-o', help='Output file for the resolution result')

    subparsers.add_parser('chains', help='List the chains in the registry')

    return parser.parse_args(argv)


def write_json_file(data: Dict[str, Any], file_path: str) -> None:
    """Write data to a JSON file."""
    try:
        with open(file_path, 'w') as f:
            json.dump(data, f, indent=2)
        logger.info(f"Data written to {file_path}")
    except OSError as e:
        logger.error(f"Failed to write to {file_path}: {e}")
        raise EosioDidError(f"Failed to write to {file_path}: {e}")


def _registry_override(registry_file: Optional[str]) -> Optional[Dict[str, Any]]:
    if not registry_file:
        return None
    return load_registry_file(registry_file)


def list_chains(registry_file: Optional[str] = None) -> Dict[str, Any]:
    """Chain name to chain id and endpoints, for every chain in the merged registry."""
    registry = build_registry(_registry_override(registry_file))
    return {
        name: {
            "chainId": entry.chainId,
            "endpoints": [service.serviceEndpoint for service in entry.service],
        }
        for name, entry in registry.items()
    }


def resolve_did_document(
    did: str,
    registry_file: Optional[str] = None,
    timeout: Optional[float] = None,
    output_file: Optional[str] = None
) -> Dict[str, Any]:
    """Resolve a DID and optionally write the result to a file."""
    options: Dict[str, Any] = {}
    override = _registry_override(registry_file)
    if override:
        options["eosio_chain_registry"] = override
    if timeout is not None:
        options["timeout"] = timeout

    result = resolve(did, options=options)

    if output_file:
        write_json_file(result, output_file)
    return result


def main(argv: Optional[list] = None) -> int:
    """Command-line entry point."""
    try:
        args = parse_args(argv)
        setup_logging(args.verbose)

        if args.command == 'resolve':
            result = resolve_did_document(
                args.did,
                registry_file=args.registry,
                timeout=args.timeout,
                output_file=args.output
            )
            print(json.dumps(result, indent=2))
            return EXIT_SUCCESS if result["didDocument"] is not None else EXIT_FAILURE

        elif args.command == 'chains':
            print(json.dumps(list_chains(args.registry), indent=2))
            return EXIT_SUCCESS

        else:
            print(f"Unknown command: {args.command}", file=sys.stderr)
            return EXIT_FAILURE

    except EosioDidError as e:
        print(json.dumps({"error": str(e)}, indent=2))
        return EXIT_FAILURE
    except Exception as e:
        print(json.dumps({"error": f"Unexpected error: {e}"}, indent=2))
        logger.exception("Unexpected error occurred")
        return EXIT_FAILURE


if __name__ == "__main__":
    sys.exit(main())
