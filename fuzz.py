#!/usr/bin/env python3
"""
Random fuzzer for the reference decoder.
Generates text full of malformed references to test decoder robustness.
"""

import argparse
import random
import string
import sys
import time
import traceback

from turboescape import ESCAPE_TABLE, NAMED_ENTITIES, escape, unescape

ENTITY_NAMES = sorted(NAMED_ENTITIES)

SPECIAL_CHARS = [
    "\x00", "\x01", "\x0b", "\x0c", "\x7f",  # Control chars
    "\ufffd",  # Replacement character
    "\u00a0",  # Non-breaking space
    "\u2028", "\u2029",  # Line/paragraph separators
    "\u200b", "\u200c", "\u200d",  # Zero-width chars
    "\ufeff",  # BOM
    "\U0001f600",  # Astral
]

REFERENCES = [
    "&amp;", "&lt;", "&gt;", "&quot;", "&apos;", "&nbsp;",
    "&", "&amp", "&ampamp;", "&am", "&#", "&#x", "&#123", "&#x1f;",
    "&#xdeadbeef;", "&#99999999;", "&#-1;", "&#x;", "&unknown;",
    "&AMP;", "&AMP", "&LT", "&GT", "&;", "&&", "&&;", ";&",
    # Edge case references
    "&#0;", "&#x0;", "&#x0D;", "&#13;",  # Null and CR
    "&#128;", "&#x80;",  # C1 control range start
    "&#xD800;", "&#xDFFF;",  # Surrogate range
    "&#x10FFFF;", "&#x110000;",  # Max and over max codepoint
    "&# 12;", "&#+12;", "&#1_2;", "&#x+1F;",  # Things int() would accept
    "&tau;", "&sigma;", "&there4;",  # Duplicated table entries
]


def random_string(min_len=0, max_len=20):
    """Generate random ASCII string."""
    length = random.randint(min_len, max_len)
    return "".join(random.choices(string.ascii_letters + string.digits, k=length))


def fuzz_named_reference():
    """Generate named references, valid or nearly valid."""
    name = random.choice(ENTITY_NAMES)
    strategies = [
        lambda: f"&{name};",
        lambda: f"&{name}",  # Unterminated
        lambda: f"&{name.upper()};",  # Wrong case
        lambda: f"&{name[:-1]};" if len(name) > 1 else "&;",  # Truncated
        lambda: f"&{name}{random_string(1, 3)};",  # Suffixed
        lambda: f"&{random_string(1, 8)};",  # Random name
    ]
    return random.choice(strategies)()


def fuzz_numeric_reference():
    """Generate decimal and hex references around interesting boundaries."""
    codepoint = random.choice([
        0, 9, 38, 60, 127, 128, 159, 160, 255, 256,
        0xD7FF, 0xD800, 0xDFFF, 0xE000, 0xFFFD, 0xFFFF, 0x10000,
        0x10FFFF, 0x110000, random.randint(0, 0x10FFFF), random.randint(0, 10**30),
    ])
    strategies = [
        lambda: f"&#{codepoint};",
        lambda: f"&#x{codepoint:x};",
        lambda: f"&#X{codepoint:X};",
        lambda: f"&#{'0' * random.randint(1, 10)}{codepoint};",  # Leading zeros
        lambda: f"&#{codepoint}",  # Unterminated
        lambda: f"&#x{codepoint:x}{random.choice('gGzZ')};",  # Bad digit
    ]
    return random.choice(strategies)()


def fuzz_text():
    """Generate text content with edge cases."""
    strategies = [
        lambda: random_string(1, 50),
        lambda: random.choice(REFERENCES),
        lambda: fuzz_named_reference(),
        lambda: fuzz_numeric_reference(),
        lambda: "".join(random.choices(SPECIAL_CHARS, k=random.randint(1, 10))),
        lambda: "".join(random.choices(list(ESCAPE_TABLE), k=random.randint(1, 10))),
        lambda: "&" + random_string(1, 10),  # Incomplete reference
        lambda: "&" * random.randint(1, 20),  # Ampersand runs
        lambda: ";" * random.randint(1, 20),  # Semicolon runs
        lambda: " " * random.randint(10, 100),  # Lots of spaces
    ]
    return random.choice(strategies)()


def generate_fuzzed_text():
    """Generate one fuzzed input string."""
    return "".join(fuzz_text() for _ in range(random.randint(1, 40)))


def check_case(text):
    """Run the checks for one input. Returns a failure description or None."""
    decoded = unescape(text)
    if not isinstance(decoded, str):
        return f"unescape returned {type(decoded).__name__}"
    if "&" not in text and decoded != text:
        return "text without references was changed"
    round_trip = unescape(escape(text))
    if round_trip != text:
        return f"escape round trip mismatch: {round_trip[:200]!r}"
    return None


def run_fuzzer(num_tests, seed=None, verbose=False, save_failures=False):
    """Run the fuzzer against the decoder."""
    if seed is not None:
        random.seed(seed)

    crashes = []
    failures = []
    hangs = []
    successes = 0

    print(f"Fuzzing turboescape with {num_tests} test cases...")
    start_time = time.time()

    for i in range(num_tests):
        text = generate_fuzzed_text()

        if verbose and i % 100 == 0:
            print(f"  Test {i}/{num_tests}...")

        try:
            start = time.perf_counter()
            failure = check_case(text)
            elapsed = time.perf_counter() - start

            if failure:
                failures.append({"test_num": i, "text": text, "error": failure})
                if verbose:
                    print(f"  FAIL: Test {i}: {failure}")
            # Check for hangs (>5 seconds)
            elif elapsed > 5.0:
                hangs.append({
                    "test_num": i,
                    "text": text,
                    "time": elapsed,
                })
                if verbose:
                    print(f"  HANG: Test {i} took {elapsed:.2f}s")
            else:
                successes += 1

        except Exception as e:
            crashes.append({
                "test_num": i,
                "text": text,
                "error": str(e),
                "traceback": traceback.format_exc(),
            })
            if verbose:
                print(f"  CRASH: Test {i}: {e}")

    elapsed_total = time.time() - start_time

    # Report results
    print(f"\n{'='*60}")
    print("FUZZING RESULTS: turboescape")
    print(f"{'='*60}")
    print(f"Total tests:    {num_tests}")
    print(f"Successes:      {successes}")
    print(f"Failures:       {len(failures)}")
    print(f"Crashes:        {len(crashes)}")
    print(f"Hangs (>5s):    {len(hangs)}")
    print(f"Total time:     {elapsed_total:.2f}s")
    print(f"Tests/second:   {num_tests/elapsed_total:.1f}")

    if crashes or failures:
        print(f"\n{'='*60}")
        print("FAILURE DETAILS:")
        print(f"{'='*60}")
        shown = (crashes + failures)[:10]
        for case in shown:
            print(f"\nTest #{case['test_num']}:")
            print(f"  Text: {case['text'][:200]!r}...")
            print(f"  Error: {case['error']}")
        remaining = len(crashes) + len(failures) - len(shown)
        if remaining > 0:
            print(f"\n... and {remaining} more")

    if hangs:
        print(f"\n{'='*60}")
        print("HANG DETAILS:")
        print(f"{'='*60}")
        for hang in hangs[:5]:
            print(f"\nTest #{hang['test_num']} ({hang['time']:.2f}s):")
            print(f"  Text: {hang['text'][:200]!r}...")

    if save_failures and (crashes or failures or hangs):
        filename = f"fuzz_failures_turboescape_{int(time.time())}.txt"
        with open(filename, "w", encoding="utf-8") as f:
            f.write("Fuzzing results for turboescape\n")
            f.write(f"Seed: {seed}\n\n")
            for crash in crashes:
                f.write(f"=== CRASH #{crash['test_num']} ===\n")
                f.write(f"Text:\n{crash['text']!r}\n")
                f.write(f"Error: {crash['error']}\n")
                f.write(f"Traceback:\n{crash['traceback']}\n\n")
            for failure in failures:
                f.write(f"=== FAIL #{failure['test_num']} ===\n")
                f.write(f"Text:\n{failure['text']!r}\n")
                f.write(f"Error: {failure['error']}\n\n")
            for hang in hangs:
                f.write(f"=== HANG #{hang['test_num']} ({hang['time']:.2f}s) ===\n")
                f.write(f"Text:\n{hang['text']!r}\n\n")
        print(f"\nFailures saved to {filename}")

    return not crashes and not failures and not hangs


def main():
    parser = argparse.ArgumentParser(description="Fuzz the reference decoder with malformed input")
    parser.add_argument(
        "--num-tests", "-n",
        type=int,
        default=1000,
        help="Number of test cases to generate (default: 1000)",
    )
    parser.add_argument(
        "--seed", "-s",
        type=int,
        default=None,
        help="Random seed for reproducibility",
    )
    parser.add_argument(
        "--verbose", "-v",
        action="store_true",
        help="Verbose output",
    )
    parser.add_argument(
        "--save-failures",
        action="store_true",
        help="Save failures to a file",
    )
    parser.add_argument(
        "--sample",
        type=int,
        metavar="N",
        help="Just print N sample fuzzed inputs with their decoding",
    )

    args = parser.parse_args()

    if args.sample:
        if args.seed:
            random.seed(args.seed)
        for i in range(args.sample):
            text = generate_fuzzed_text()
            print(f"=== Sample {i+1} ===")
            print(repr(text))
            print(repr(unescape(text)))
            print()
        return

    success = run_fuzzer(
        args.num_tests,
        seed=args.seed,
        verbose=args.verbose,
        save_failures=args.save_failures,
    )

    sys.exit(0 if success else 1)


if __name__ == "__main__":
    main()
