"""Command-line interface for aes-stream.

Usage:
    aes-stream encrypt < key_and_plaintext.bin > ciphertext.bin
    aes-stream encrypt --input in.bin --output out.bin --short-block error
    aes-stream block --key <hex32> --pt <hex32> --verbose
    aes-stream selftest --n 100 --seed 1
"""

from __future__ import annotations

import random
import secrets
import sys
from typing import BinaryIO, TextIO

import click

from . import __version__
from .cipher import BlockCipher
from .config import ShortBlockPolicy, StreamConfig
from .errors import AesStreamError
from .framer import encrypt_stream
from .selfcheck import KNOWN_ANSWERS, check_block, run_known_answers, run_random
from .trace import TraceRecorder, print_header, print_result
from .utils import bytes_to_hex, bytes_to_state, format_state_grid, hex_to_bytes

# Default AES-128 test values from FIPS-197 Appendix B
DEFAULT_KEY_HEX = "2b7e151628aed2a6abf7158809cf4f3c"
DEFAULT_PT_HEX = "3243f6a8885a308d313198a2e0370734"
DEFAULT_CT_HEX = "3925841d02dc09fbdc118597196a0b32"


@click.group()
@click.version_option(version=__version__, prog_name="aes-stream")
def main() -> None:
    """AES-128 block encryption of a key-prefixed byte stream.

    The first 16 bytes of the input are the key; every following 16-byte
    block is encrypted independently and written to the output.
    """
    pass


@main.command()
@click.option(
    "--input", "-i",
    "input_stream",
    type=click.File("rb"),
    default="-",
    help="Input file: key block followed by plaintext blocks (default: stdin)",
)
@click.option(
    "--output", "-o",
    "output_stream",
    type=click.File("wb"),
    default="-",
    help="Output file for ciphertext (default: stdout)",
)
@click.option(
    "--short-block",
    type=click.Choice([p.value for p in ShortBlockPolicy]),
    default=ShortBlockPolicy.ZERO_PAD.value,
    show_default=True,
    help="Policy for a trailing block shorter than 16 bytes",
)
@click.option(
    "--verbose", "-v",
    is_flag=True,
    help="Print per-round traces and a summary to stderr",
)
@click.option(
    "--trace",
    "trace_file",
    type=click.File("w"),
    default=None,
    help="Write a JSON Lines round trace to FILE",
)
def encrypt(
    input_stream: BinaryIO,
    output_stream: BinaryIO,
    short_block: str,
    verbose: bool,
    trace_file: TextIO | None,
) -> None:
    """Encrypt a key-prefixed stream of 16-byte blocks."""
    config = StreamConfig(short_block=ShortBlockPolicy(short_block), verbose=verbose)

    tracer = None
    if config.verbose or trace_file:
        tracer = TraceRecorder(
            verbose=config.verbose, trace_file=trace_file, keep_records=False
        )

    try:
        stats = encrypt_stream(input_stream, output_stream, config, tracer=tracer)
    except AesStreamError as e:
        click.echo(f"Error: {e}", err=True)
        sys.exit(1)

    if config.verbose:
        click.echo(stats.summary(), err=True)


@main.command()
@click.option(
    "--key",
    "key_hex",
    default=None,
    help="AES-128 key as 32 hex chars (default: FIPS-197 test key)",
)
@click.option(
    "--pt",
    "pt_hex",
    default=None,
    help="Plaintext as 32 hex chars (default: FIPS-197 test plaintext)",
)
@click.option(
    "--verbose", "-v",
    is_flag=True,
    help="Print the state after every operation",
)
@click.option(
    "--trace",
    "trace_file",
    type=click.File("w"),
    default=None,
    help="Write a JSON Lines round trace to FILE",
)
def block(
    key_hex: str | None,
    pt_hex: str | None,
    verbose: bool,
    trace_file: TextIO | None,
) -> None:
    """Encrypt a single block given in hex and verify it."""
    key_source = "provided" if key_hex else "default (FIPS-197)"
    pt_source = "provided" if pt_hex else "default (FIPS-197)"
    key_hex = key_hex or DEFAULT_KEY_HEX
    pt_hex = pt_hex or DEFAULT_PT_HEX

    key = _parse_block_hex(key_hex, "Key")
    plaintext = _parse_block_hex(pt_hex, "Plaintext")

    print_header("AES-128 Encryption")
    click.echo(f"Key:       {key_hex} ({key_source})")
    click.echo(f"Plaintext: {pt_hex} ({pt_source})")
    click.echo("State:")
    click.echo(format_state_grid(bytes_to_state(plaintext)))

    tracer = TraceRecorder(verbose=verbose, trace_file=trace_file, out=sys.stdout)
    cipher = BlockCipher(key, tracer=tracer)
    ciphertext = cipher.encrypt(plaintext)

    mismatch = check_block(key, plaintext, ciphertext)
    print_result(bytes_to_hex(ciphertext), cipher.rounds, mismatch is None)
    if verbose:
        click.echo(cipher.op_counter.summary())

    if mismatch is not None:
        click.echo(mismatch.describe(), err=True)
        sys.exit(1)


@main.command()
@click.option(
    "--n",
    "num_tests",
    type=int,
    default=100,
    help="Number of random test vectors (default: 100)",
)
@click.option(
    "--seed",
    type=int,
    default=None,
    help="Random seed for reproducibility",
)
@click.option(
    "--verbose", "-v",
    is_flag=True,
    help="Show detailed output",
)
def selftest(num_tests: int, seed: int | None, verbose: bool) -> None:
    """Check the cipher against FIPS-197 vectors and PyCryptodome."""
    click.echo("Running FIPS-197 KAT tests...")
    kat_failures = run_known_answers()
    for mismatch in kat_failures:
        click.echo(f"  FAIL {mismatch.describe()}")
    if verbose:
        failed = {m.label for m in kat_failures}
        for vec in KNOWN_ANSWERS:
            if vec.label not in failed:
                click.echo(f"  PASS {vec.label}")
    kat_total = len(KNOWN_ANSWERS)
    click.echo(f"FIPS-197 tests: {kat_total - len(kat_failures)}/{kat_total} passed")

    click.echo(f"\nRunning {num_tests} random tests...")

    if seed is not None:
        rng = random.Random(seed)
        random_bytes = rng.randbytes
    else:
        random_bytes = secrets.token_bytes

    random_failures = run_random(num_tests, random_bytes)
    if verbose:
        for mismatch in random_failures:
            click.echo(f"  FAIL {mismatch.describe()}")
    click.echo(f"Random tests: {num_tests - len(random_failures)}/{num_tests} passed")

    total_tests = kat_total + num_tests
    total_failures = len(kat_failures) + len(random_failures)

    click.echo("")
    if total_failures == 0:
        click.echo(f"SELFTEST PASSED: All {total_tests} tests passed")
        sys.exit(0)
    else:
        click.echo(f"SELFTEST FAILED: {total_failures} failures")
        sys.exit(1)


def _parse_block_hex(value: str, label: str) -> bytes:
    """Parse a 32-char hex option, exiting with status 1 on bad input."""
    try:
        data = hex_to_bytes(value)
    except ValueError as e:
        click.echo(f"Error: Invalid {label.lower()} hex: {e}", err=True)
        sys.exit(1)
    if len(data) != 16:
        click.echo(
            f"Error: {label} must be 32 hex chars (16 bytes), got {len(value)} chars",
            err=True,
        )
        sys.exit(1)
    return data


if __name__ == "__main__":
    main()
