"""Sample harness for inline_asm - expands every asm! in a directory of sources."""

import logging
import os
import sys
import time

# Add project root to path
sys.path.insert(0, os.path.dirname(os.path.abspath(__file__)))

from inline_asm import expand_source, ExpansionTable
from inline_asm.printer import AsmPrinter


def find_sample_files(root):
    """Walk samples directory and collect all files."""
    if not os.path.isdir(root):
        print(f"No samples directory found at {root}")
        return []
    files = []
    for dirpath, _, filenames in os.walk(root):
        for fn in sorted(filenames):
            files.append(os.path.join(dirpath, fn))
    return files


def run_samples(samples_dir):
    files = find_sample_files(samples_dir)
    if not files:
        print("No sample files found.")
        return 0

    table = ExpansionTable()
    total = len(files)
    passed = 0
    failed = []

    print(f"Found {total} sample files.\n")
    print("-" * 80)

    for path in files:
        rel = os.path.relpath(path, samples_dir)
        with open(path, 'r', encoding='utf-8', errors='replace') as f:
            text = f.read()
        t0 = time.time()
        results = expand_source(text, filename=rel, expansions=table)
        elapsed = time.time() - t0
        n_errors = sum(len(r.errors) for r in results)
        n_warnings = sum(len(r.warnings) for r in results)

        status = "PASS" if n_errors == 0 else "FAIL"
        print(f"  {status}  {rel} ({len(results)} asm!, {n_errors} errors, "
              f"{n_warnings} warnings, {elapsed:.3f}s)")
        for r in results:
            for d in r.diagnostics:
                print(f"        {d}")
        if n_errors:
            failed.append(rel)
        else:
            passed += 1

    print("-" * 80)
    print(f"\nSummary: {passed}/{total} passed, {len(failed)} failed, "
          f"{len(table)} expansions recorded\n")

    if failed:
        print("Failed files:")
        for rel in failed:
            print(f"  {rel}")
        return 1
    return 0


def single_run(fn):
    """Print every directive in *fn* back as normalized asm! text."""
    printer = AsmPrinter()
    with open(fn, 'r', encoding='utf-8', errors='replace') as f:
        text = f.read()
    for result in expand_source(text, filename=fn):
        for d in result.diagnostics:
            print(d, file=sys.stderr)
        print(printer.emit_invocation(result.node))
    return 0


if __name__ == '__main__':
    if os.environ.get("ASM_DEBUG"):
        logging.basicConfig(level=logging.DEBUG)
    if len(sys.argv) < 2:
        print("Usage: python run_samples.py <samples_dir> [single_file]")
        sys.exit(1)
    if len(sys.argv) > 2:
        sys.exit(single_run(sys.argv[2]))
    sys.exit(run_samples(sys.argv[1]))
