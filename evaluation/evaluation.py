#!/usr/bin/env python3
"""
Evaluation runner for the Huffman text codec.

This evaluation script:
- Runs the pytest suite in tests/ and collects individual test results
- Compresses every file of a data directory, checks the round trip and
  records compression ratio and timings
- Generates a structured JSON report with environment metadata

Run with:
    python evaluation/evaluation.py [--data-dir DIR] [--output report.json]
"""
import os
import sys
import json
import time
import uuid
import platform
import subprocess
from datetime import datetime
from pathlib import Path

PROJECT_ROOT = Path(__file__).resolve().parent.parent
if str(PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(PROJECT_ROOT))

from huffman_service import HuffmanService  # noqa: E402

OUTCOMES = {
    " PASSED": "passed",
    " FAILED": "failed",
    " ERROR": "error",
    " SKIPPED": "skipped",
}


def generate_run_id():
    """Generate a short unique run ID."""
    return uuid.uuid4().hex[:8]


def get_environment_info():
    """Collect environment information for the report."""
    return {
        "python_version": platform.python_version(),
        "platform": platform.platform(),
        "os": platform.system(),
        "architecture": platform.machine(),
        "hostname": platform.node(),
    }


def parse_pytest_verbose_output(output):
    """Parse pytest -v output into a list of {nodeid, name, outcome} dicts."""
    tests = []
    for line in output.splitlines():
        line = line.strip()
        # e.g. tests/test_codec.py::test_roundtrip_aaab PASSED [ 12%]
        if "::" not in line:
            continue
        for marker, outcome in OUTCOMES.items():
            if marker in line:
                nodeid = line.split(marker)[0].strip()
                tests.append({
                    "nodeid": nodeid,
                    "name": nodeid.split("::")[-1],
                    "outcome": outcome,
                })
                break
    return tests


def summarize(tests):
    summary = {"total": len(tests)}
    for outcome in OUTCOMES.values():
        summary[outcome] = sum(1 for t in tests if t["outcome"] == outcome)
    return summary


def run_pytest(tests_dir, timeout=300):
    """Run pytest on tests_dir with the project root on PYTHONPATH."""
    print(f"\n{'=' * 60}")
    print("RUNNING TESTS")
    print(f"{'=' * 60}")

    cmd = [sys.executable, "-m", "pytest", str(tests_dir), "-v", "--tb=short"]
    env = os.environ.copy()
    env["PYTHONPATH"] = os.pathsep.join(filter(None, [str(PROJECT_ROOT), env.get("PYTHONPATH")]))

    try:
        result = subprocess.run(
            cmd,
            capture_output=True,
            text=True,
            cwd=str(PROJECT_ROOT),
            env=env,
            timeout=timeout,
        )
    except subprocess.TimeoutExpired:
        print("Test execution timed out")
        return {"success": False, "exit_code": -1, "tests": [], "summary": {"error": "timeout"}}

    tests = parse_pytest_verbose_output(result.stdout)
    summary = summarize(tests)
    print(f"Results: {summary['passed']} passed, {summary['failed']} failed, "
          f"{summary['error']} errors, {summary['skipped']} skipped (total: {summary['total']})")

    return {
        "success": result.returncode == 0,
        "exit_code": result.returncode,
        "tests": tests,
        "summary": summary,
        "stdout": result.stdout[-3000:],
        "stderr": result.stderr[-1000:],
    }


def measure_file(path):
    """Compress and decompress one file, returning size and timing figures."""
    data = Path(path).read_bytes()
    service = HuffmanService()

    t0 = time.perf_counter()
    packed = service.compress(data)
    t1 = time.perf_counter()
    decoded = service.decompress(packed)
    t2 = time.perf_counter()

    return {
        "file": Path(path).name,
        "original_size": len(data),
        "compressed_size": len(packed),
        "compression_ratio": round(len(data) / len(packed), 3) if packed else None,
        "distinct_symbols": sum(1 for entry in service.sorted_list if entry.probability > 0),
        "compression_time_ms": round((t1 - t0) * 1000, 3),
        "decompression_time_ms": round((t2 - t1) * 1000, 3),
        "roundtrip_ok": decoded == data,
    }


def run_compression_benchmark(data_dir):
    print(f"\n{'=' * 60}")
    print(f"COMPRESSION BENCHMARK: {data_dir}")
    print(f"{'=' * 60}")

    data_dir = Path(data_dir)
    if not data_dir.is_dir():
        print(f"No data directory at {data_dir}, skipping")
        return []

    rows = []
    for path in sorted(data_dir.iterdir()):
        if not path.is_file():
            continue
        row = measure_file(path)
        rows.append(row)
        status = "ok" if row["roundtrip_ok"] else "ROUNDTRIP FAILED"
        print(f"  {row['file']}: {row['original_size']} -> {row['compressed_size']} bytes "
              f"(ratio {row['compression_ratio']}) {status}")
    return rows


def generate_output_path():
    """Generate output path in format: evaluation/YYYY-MM-DD/HH-MM-SS/report.json"""
    now = datetime.now()
    output_dir = PROJECT_ROOT / "evaluation" / now.strftime("%Y-%m-%d") / now.strftime("%H-%M-%S")
    output_dir.mkdir(parents=True, exist_ok=True)
    return output_dir / "report.json"


def main(argv=None):
    """Main entry point for evaluation."""
    import argparse

    parser = argparse.ArgumentParser(description="Run the Huffman codec evaluation")
    parser.add_argument(
        "--output",
        type=str,
        default=None,
        help="Output JSON file path (default: evaluation/YYYY-MM-DD/HH-MM-SS/report.json)"
    )
    parser.add_argument(
        "--data-dir",
        type=str,
        default=str(PROJECT_ROOT / "data"),
        help="Directory of text files to compress (default: ./data)"
    )
    parser.add_argument("--skip-tests", action="store_true", help="only run the compression benchmark")
    args = parser.parse_args(argv)

    run_id = generate_run_id()
    started_at = datetime.now()
    print(f"Run ID: {run_id}")
    print(f"Started at: {started_at.isoformat()}")

    tests = None if args.skip_tests else run_pytest(PROJECT_ROOT / "tests")
    benchmark = run_compression_benchmark(args.data_dir)

    success = (tests is None or tests["success"]) and all(row["roundtrip_ok"] for row in benchmark)
    finished_at = datetime.now()

    report = {
        "run_id": run_id,
        "started_at": started_at.isoformat(),
        "finished_at": finished_at.isoformat(),
        "duration_seconds": round((finished_at - started_at).total_seconds(), 6),
        "success": success,
        "environment": get_environment_info(),
        "tests": tests,
        "benchmark": benchmark,
    }

    output_path = Path(args.output) if args.output else generate_output_path()
    output_path.parent.mkdir(parents=True, exist_ok=True)
    with open(output_path, "w") as f:
        json.dump(report, f, indent=2)

    print(f"\nReport saved to: {output_path}")
    print(f"Success: {'YES' if success else 'NO'}")
    return 0 if success else 1


if __name__ == "__main__":
    sys.exit(main())
