#!/usr/bin/env python3
"""
Apple Music request explorer
Command line entry point for listing the request catalog, running a single
request and checking token status.
"""

import sys
import json
import asyncio
import logging
import argparse
from typing import Dict, List, Optional

from config.settings import Settings
from asapplemusic.api.apple_music_client import AppleMusicClient
from asapplemusic.api.base_client import AppleMusicError
from asapplemusic.api.token_provider import SourceAPI
from asapplemusic.explorer import list_requests, make_call, serialize_result, UnknownRequestError
from asapplemusic.utils.validators import ValidationError

def configure_logging(settings: Settings):
    """Configure root logging from settings."""
    logging.basicConfig(level=settings.log_level, format=settings.log_format)
    if settings.debug:
        logging.getLogger("asapplemusic").setLevel(logging.DEBUG)

def create_client(settings: Settings) -> AppleMusicClient:
    return AppleMusicClient(settings=settings)

def parse_params(pairs: List[str]) -> Dict[str, str]:
    """Parse key=value command line pairs."""
    params = {}
    for pair in pairs:
        key, sep, value = pair.partition("=")
        if not sep or not key:
            raise ValidationError(f"Expected key=value, got {pair!r}")
        params[key.strip()] = value
    return params

def display_requests():
    """Print the request catalog."""
    print("📋 Available requests:")
    print("-" * 60)
    for request_type in list_requests():
        params = ", ".join(
            f"[{param.name}]" if param.optional else param.name
            for param in request_type.params
        )
        print(f"  {request_type.name:<32} {params}")
        print(f"  {'':<32} {request_type.description}")

def write_output(data, output: Optional[str]):
    text = json.dumps(data, indent=2)
    if output:
        with open(output, 'w') as f:
            f.write(text)
        print(f"💾 Result saved to: {output}")
    else:
        print(text)

async def run_call(args, settings: Settings) -> int:
    """Run one request from the catalog and print the result as JSON."""
    try:
        params = parse_params(args.params)
        client = create_client(settings)
    except ValidationError as e:
        print(f"❌ {e}")
        return 2

    async with client:
        try:
            result = await make_call(client, args.call_type, params)
        except (UnknownRequestError, ValidationError) as e:
            print(f"❌ {e}")
            return 2
        except AppleMusicError as e:
            print(f"❌ Request failed: {e}")
            write_output({"errors": [e.error.to_dict()]}, args.output)
            return 1

    write_output(serialize_result(result), args.output)
    return 0

async def token_status(args, settings: Settings) -> int:
    """Report which tokens are available."""
    source = settings.developer_token_source
    if source is None:
        print("❌ No developer token source configured")
        print("💡 Set APPLE_MUSIC_DEVELOPER_TOKEN, APPLE_MUSIC_TOKEN_URL or APPLE_MUSIC_KEY_ID/TEAM_ID/PRIVATE_KEY")
        return 1

    print(f"🔑 Developer token source: {source}")
    try:
        client = create_client(settings)
    except ValidationError as e:
        print(f"❌ {e}")
        return 2

    async with client:
        tokens = await client.token_provider.tokens_for(SourceAPI.DEVELOPER)
        if tokens is None:
            print("❌ Could not obtain a developer token")
            return 1
        print("✅ Developer token available")
        if args.show:
            print(tokens[0])

        user_token = await client.token_provider.get_user_token()
        if user_token:
            print("✅ Music user token available")
        else:
            print("⚠️  No music user token: /me requests will fail with 401")
    return 0

def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description='Apple Music request explorer')

    # Add subcommands
    subparsers = parser.add_subparsers(dest='command', help='Available commands')

    # List requests command
    subparsers.add_parser('requests', help='List the available requests and their parameters')

    # Call command
    call_parser = subparsers.add_parser('call', help='Run one request')
    call_parser.add_argument('call_type', type=str, help='Request name, e.g. getAlbum')
    call_parser.add_argument('params', nargs='*', help='Parameters as key=value, e.g. id=310730204 storefront=us')
    call_parser.add_argument('--output', type=str, help='Write the JSON result to a file')

    # Token command
    token_parser = subparsers.add_parser('token', help='Check token status')
    token_parser.add_argument('--show', action='store_true', help='Print the developer token')

    return parser

def main(argv: Optional[List[str]] = None) -> int:
    """Main entry point with command line argument parsing."""
    parser = build_parser()
    args = parser.parse_args(argv)

    settings = Settings()
    configure_logging(settings)

    # Handle commands
    if args.command == 'requests':
        display_requests()
        return 0
    elif args.command == 'call':
        return asyncio.run(run_call(args, settings))
    elif args.command == 'token':
        return asyncio.run(token_status(args, settings))

    parser.print_help()
    return 1

if __name__ == "__main__":
    sys.exit(main())
