"""
Command-line entry point for the approval detector.

This script:
1. Parses command-line arguments (falling back to environment variables)
2. Loads and validates the detection request
3. Runs the approval checks against the trace
4. Prints and optionally saves the response payload
"""

import argparse
import json
import logging
import sys
from pathlib import Path
from typing import Any, Dict, Optional

from pydantic import ValidationError

from .clients import EtherscanReputationClient
from .config import DetectorSettings, parse_amount
from .constants import DEFAULT_CHAIN_ID
from .core import ApprovalDetector
from .errors import ApprovalDetectorError, ConfigurationError
from .models import DetectionRequest
from .reporter import build_error_payload, build_response_payload, format_verdict_line, save_json_result

logger = logging.getLogger(__name__)

EXIT_CLEAN = 0
EXIT_DETECTED = 1
EXIT_ERROR = 2


def load_request_payload(source: str) -> Dict[str, Any]:
    """
    Read a detection request as JSON from a file, or from stdin when source is '-'.
    """
    if source == '-':
        return json.load(sys.stdin)
    with open(source) as f:
        return json.load(f)


def amount_argument(value: str) -> int:
    try:
        return parse_amount(value)
    except ConfigurationError as e:
        raise argparse.ArgumentTypeError(str(e))


def build_parser(settings: DetectorSettings) -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description='Detect suspicious token approvals in a transaction trace',
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Environment Variables (can also be set in .env file):
  ETHERSCAN_API_KEY     Etherscan API key
  CHAIN_ID              Chain ID for reputation lookups (default: request chainId, then 1)
  RPC_URL               JSON-RPC endpoint used for contract checks (optional)
  MAX_ALLOWED_APPROVAL  Largest approval amount allowed, hex or decimal (default: 0x174876e800)
  REQUEST_TIMEOUT       HTTP timeout in seconds (default: 10)

Priority: Command-line arguments > Environment variables > Defaults

Exit codes: 0 = nothing detected, 1 = suspicious approval detected, 2 = error
        """
    )
    parser.add_argument(
        '--request',
        required=True,
        help="Path to the detection request JSON, or '-' for stdin"
    )
    parser.add_argument(
        '--output',
        type=Path,
        default=None,
        help='Also save the response JSON to this path'
    )
    parser.add_argument(
        '--api-key',
        default=settings.etherscan_api_key,
        help='Etherscan API key (env: ETHERSCAN_API_KEY)'
    )
    parser.add_argument(
        '--chain-id',
        type=int,
        default=settings.chain_id,
        help='Chain ID for reputation lookups (env: CHAIN_ID)'
    )
    parser.add_argument(
        '--rpc-url',
        default=settings.rpc_url,
        help='JSON-RPC endpoint for contract checks (env: RPC_URL, optional)'
    )
    parser.add_argument(
        '--max-allowed-approval',
        type=amount_argument,
        default=settings.max_allowed_approval,
        help='Largest approval amount allowed, hex or decimal (env: MAX_ALLOWED_APPROVAL)'
    )
    parser.add_argument(
        '--debug',
        action='store_true',
        default=False,
        help='Enable debug mode to log to file (default: False)'
    )
    return parser


def configure_logging(debug: bool):
    if debug:
        output_dir = Path("output")
        output_dir.mkdir(exist_ok=True)

        logging.basicConfig(
            level=logging.DEBUG,
            format='%(asctime)s - %(levelname)s - %(message)s',
            handlers=[
                logging.FileHandler(output_dir / 'detect_approvals.log')
            ]
        )
    else:
        logging.basicConfig(
            level=logging.CRITICAL,
            format='%(asctime)s - %(levelname)s - %(message)s',
            handlers=[
                logging.NullHandler()
            ]
        )


def emit(payload: Dict[str, Any], output: Optional[Path] = None):
    print(json.dumps(payload, indent=2))
    print(format_verdict_line(payload), file=sys.stderr)
    if output:
        save_json_result(payload, output)


def main(argv=None) -> int:
    """Main entry point."""
    try:
        settings = DetectorSettings.from_env()
    except ApprovalDetectorError as e:
        print(f"❌ {e}", file=sys.stderr)
        return EXIT_ERROR

    parser = build_parser(settings)
    args = parser.parse_args(argv)
    configure_logging(args.debug)

    if not args.api_key:
        parser.error("--api-key is required (or set ETHERSCAN_API_KEY environment variable)")

    try:
        raw_request = load_request_payload(args.request)
    except (OSError, ValueError, RecursionError) as e:
        logger.error(f"Could not read request {args.request}: {e}")
        emit(build_error_payload(f"Could not read request: {e}"), args.output)
        return EXIT_ERROR

    try:
        request = DetectionRequest.model_validate(raw_request)
    except ValidationError as e:
        logger.error(f"Invalid detection request: {e}")
        emit(build_error_payload(str(e), raw_request if isinstance(raw_request, dict) else None), args.output)
        return EXIT_ERROR

    chain_id = args.chain_id or request.chainId or DEFAULT_CHAIN_ID
    logger.info(f"Running approval detection for {request.hash or request.id} on chain {chain_id}")

    try:
        reputation_client = EtherscanReputationClient(
            etherscan_api_key=args.api_key,
            chain_id=chain_id,
            rpc_url=args.rpc_url,
            timeout=settings.request_timeout,
        )
        detector = ApprovalDetector(
            reputation_provider=reputation_client,
            max_allowed_approval=args.max_allowed_approval,
        )
        response = detector.detect(request)
    except ApprovalDetectorError as e:
        logger.error(f"❌ Detection failed: {e}")
        emit(build_error_payload(str(e), raw_request), args.output)
        return EXIT_ERROR

    payload = build_response_payload(response)
    emit(payload, args.output)

    if response.detected:
        logger.warning(f"⚠️  Suspicious approval: {response.message}")
        return EXIT_DETECTED

    logger.info("✅ No suspicious approvals - transaction passed")
    return EXIT_CLEAN


if __name__ == '__main__':
    sys.exit(main())
