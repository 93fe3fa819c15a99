#!/usr/bin/env python3
import sys, json, argparse, time
from bigprime import BigInt4096, MalformedNumericParse, Mode, WITNESSES, run_task, write_primes

def _bigint_arg(text: str) -> BigInt4096:
    try:
        return BigInt4096.parse(text)
    except MalformedNumericParse as e:
        raise argparse.ArgumentTypeError(f"{text!r} is not a valid integer ({e.reason})")

def _seconds_arg(text: str) -> int:
    try:
        v = int(text, 10)
    except ValueError:
        raise argparse.ArgumentTypeError("requires a non-negative integer")
    if v < 0:
        raise argparse.ArgumentTypeError("requires a non-negative integer")
    return v

def _rounds_arg(text: str) -> int:
    v = _seconds_arg(text)
    if v > len(WITNESSES):
        raise argparse.ArgumentTypeError(f"at most {len(WITNESSES)} rounds")
    return v

def build_parser() -> argparse.ArgumentParser:
    ap = argparse.ArgumentParser(
        prog="bigprime",
        description="Prime searches over 4096-bit integers (Miller-Rabin, witnesses 2,3,5,7,11).",
    )
    mode = ap.add_mutually_exclusive_group(required=True)
    mode.add_argument("-n", dest="nth", type=_bigint_arg, metavar="N", help="Nth prime")
    mode.add_argument("--le", type=_bigint_arg, metavar="N", help="Largest prime <= N")
    mode.add_argument("--all", type=_bigint_arg, metavar="N", help="All primes <= N (written to --out)")
    ap.add_argument("-t", dest="timeout", type=_seconds_arg, default=0, metavar="SECONDS",
                    help="Limit execution time (0 = no limit)")
    ap.add_argument("--rt", action="store_true", help="Print total runtime")
    ap.add_argument("--out", default="primes.txt", help="Output file for --all")
    ap.add_argument("--rounds", type=_rounds_arg, default=len(WITNESSES), help="Miller-Rabin rounds (0..5)")
    ap.add_argument("--progress-every", type=int, default=0, help="Progress line every K candidates (--all)")
    ap.add_argument("--json", action="store_true", help="Emit JSON instead of text")
    return ap

def main(argv=None) -> int:
    args = build_parser().parse_args(argv)
    if args.nth is not None:
        mode, value = Mode.NTH, args.nth
    elif args.le is not None:
        mode, value = Mode.AT_MOST, args.le
    else:
        mode, value = Mode.ALL, args.all

    if mode is Mode.NTH and not value:
        print("Error: -n requires a positive integer.", file=sys.stderr)
        return 2

    t0 = time.perf_counter()
    if not args.json:
        print("Starting prime task...")
    res = run_task(mode, value, timeout_s=args.timeout, rounds=args.rounds,
                   progress_every=args.progress_every)
    rc = 1 if res.timed_out else 0

    if mode is Mode.ALL:
        try:
            write_primes(res.primes, args.out)
        except OSError as e:
            print(f"Failed to open {args.out} for writing: {e}", file=sys.stderr)
            rc = 1
        else:
            if not args.json:
                print(f"Found {len(res.primes)} primes <= {value}")
                print(f"Primes written to {args.out}")

    if args.json:
        out = res.to_dict()
        if mode is Mode.ALL:
            out.pop("primes")
            out["out"] = args.out
        print(json.dumps(out, indent=2))
    elif mode is Mode.NTH:
        shown = res.prime if res.prime is not None else "timed out"
        print(f"The {value}th prime is: {shown}")
    elif mode is Mode.AT_MOST:
        if res.prime is not None:
            print(f"Largest prime <= {value} is: {res.prime}")
        elif res.timed_out:
            print(f"Largest prime <= {value} is: timed out")
        else:
            print(f"No prime <= {value}")

    if args.rt and not args.json:
        print(f"Total elapsed time: {int(time.perf_counter() - t0)} seconds")
    return rc

if __name__ == "__main__":
    raise SystemExit(main())
