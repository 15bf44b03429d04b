"""
Command-line interface for BlockLab.

    blocklab avalanche <cipher> <key> <plaintext> <samples>
    blocklab vectors [cipher]
    blocklab sbox {aes128,present80}
    blocklab list
"""

import argparse
import logging
import sys
from typing import List, Optional

from .analysis.avalanche import AVALANCHE_DEFAULTS, AvalancheReport, AvalancheTest
from .cipher_core.block_cipher import InvalidParameterError, UnsupportedCipherError
from .cipher_core.registry import available_ciphers, create_cipher
from .cipher_core.test_vectors import verify_known_answers
from .sbox_gen.properties import evaluate_sbox
from .sbox_gen.tables import AES_SBOX, PRESENT_SBOX

logger = logging.getLogger(__name__)

SBOXES = {'aes128': AES_SBOX, 'present80': PRESENT_SBOX}


def parse_hex(text: str, what: str) -> bytes:
    """
    Decode a hexadecimal command-line argument.

    Args:
        text: The hex string
        what: Argument name used in the error message

    Returns:
        The decoded bytes
    """
    try:
        return bytes.fromhex(text)
    except ValueError:
        raise InvalidParameterError(f"{what} must be hexadecimal, got {text!r}") from None


def print_round(result, bits: int) -> None:
    """Print the distance histogram and statistics of one round count."""
    print(f"******** ROUND {result.rounds} ********")
    print("dist\tcount\texpect")
    for i in range(bits + 1):
        print(f"{i}\t{result.counts[i]}\t{result.expected[i]:.4e}")
    print(f"chi^2  = {result.chisqr:.4e}")
    print(f"pvalue = {result.pvalue:.4e}")


def print_summary(report: AvalancheReport) -> None:
    """Print one line per round count, marking rejected rounds with ***."""
    print("******** SUMMARY ********")
    print("round\tchi^2\tpvalue")
    for result in report.results:
        flag = " ***" if result.rejected else ""
        print(f"{result.rounds}\t{result.chisqr:.4e}\t{result.pvalue:.4e}{flag}")


def cmd_avalanche(args) -> int:
    """
    Run the avalanche test for every round count of a cipher.

    Args:
        args: Parsed arguments (cipher, key, plaintext, samples, alpha,
            workers, summary_only)

    Returns:
        Process exit status
    """
    key = parse_hex(args.key, "Key")
    plaintext = parse_hex(args.plaintext, "Plaintext")
    test = AvalancheTest(args.cipher, key, plaintext, args.samples,
                         alpha=args.alpha, workers=args.workers)

    print("$ blocklab avalanche", args.cipher, args.key, args.plaintext, args.samples)
    report = test.run()
    if not args.summary_only:
        for result in report.results:
            print_round(result, test.bits)
    print_summary(report)
    return 0


def cmd_vectors(args) -> int:
    """Check the known-answer vectors; exit status 1 if any fails."""
    results = verify_known_answers(args.cipher)
    failures = 0
    for result in results:
        vector = result.vector
        status = "ok" if result.passed else "FAILED"
        print(f"{vector.cipher.value}\t{vector.key}\t{vector.plaintext}\t"
              f"{result.encrypted}\t{status}")
        if not result.passed:
            failures += 1
    print(f"{len(results) - failures}/{len(results)} test vectors passed")
    return 1 if failures else 0


def cmd_sbox(args) -> int:
    """Print the differential and linear metrics of a cipher's S-box."""
    metrics = evaluate_sbox(SBOXES[args.cipher])
    print(f"S-box of {args.cipher} ({metrics['bits']}-bit)")
    print(f"Differential uniformity: {metrics['differential']}")
    print(f"Max differential probability: {metrics['differential_probability']:.4f}")
    print(f"Linear bias: {metrics['linear']:.4f}")
    return 0


def cmd_list(args) -> int:
    """List block size, key size and full round count of each cipher."""
    print("cipher\tblock\tkey\trounds")
    for name in available_ciphers():
        cipher = create_cipher(name)
        print(f"{name}\t{cipher.block_size()}\t{cipher.key_size()}\t{cipher.num_rounds()}")
    return 0


def build_parser() -> argparse.ArgumentParser:
    """Build the argument parser with one subcommand per operation."""
    parser = argparse.ArgumentParser(
        prog="blocklab", description="BlockLab - round-reduced block cipher laboratory")
    parser.add_argument("-v", "--verbose", action="store_true", help="Enable debug logging")
    subparsers = parser.add_subparsers(dest="command")
    subparsers.required = True

    avalanche_parser = subparsers.add_parser(
        "avalanche", help="Avalanche test of a cipher for every round count")
    avalanche_parser.add_argument("cipher", help="Cipher name")
    avalanche_parser.add_argument("key", help="Key (hexadecimal)")
    avalanche_parser.add_argument("plaintext", help="Plaintext (hexadecimal)")
    avalanche_parser.add_argument("samples", type=int, help="Number of ciphertext samples")
    avalanche_parser.add_argument("--alpha", type=float, default=AVALANCHE_DEFAULTS['alpha'],
                                  help="Significance threshold")
    avalanche_parser.add_argument("--workers", type=int, default=None,
                                  help="Number of processes (default: $BLOCKLAB_WORKERS or 1)")
    avalanche_parser.add_argument("--summary-only", action="store_true",
                                  help="Omit the per-round histograms")
    avalanche_parser.set_defaults(func=cmd_avalanche)

    vectors_parser = subparsers.add_parser("vectors", help="Run the known-answer tests")
    vectors_parser.add_argument("cipher", nargs="?", default=None, help="Cipher name")
    vectors_parser.set_defaults(func=cmd_vectors)

    sbox_parser = subparsers.add_parser("sbox", help="Differential and linear S-box metrics")
    sbox_parser.add_argument("cipher", choices=sorted(SBOXES))
    sbox_parser.set_defaults(func=cmd_sbox)

    list_parser = subparsers.add_parser("list", help="List the available ciphers")
    list_parser.set_defaults(func=cmd_list)

    return parser


def main(argv: Optional[List[str]] = None) -> int:
    """
    Entry point of the blocklab command.

    Args:
        argv: Arguments without the program name (default: sys.argv[1:])

    Returns:
        Process exit status
    """
    parser = build_parser()
    args = parser.parse_args(argv)
    logging.basicConfig(level=logging.DEBUG if args.verbose else logging.WARNING,
                        format="%(levelname)s %(name)s: %(message)s")
    try:
        return args.func(args)
    except (InvalidParameterError, UnsupportedCipherError) as e:
        logger.debug("Command %s failed", args.command, exc_info=True)
        print(f"blocklab: {e}", file=sys.stderr)
        return 1


if __name__ == "__main__":
    sys.exit(main())
