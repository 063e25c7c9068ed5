"""
Result writers for benchmark runs.
"""

import csv
import json
from datetime import datetime
from pathlib import Path
from typing import Any, Dict, List

from .sysinfo import get_timestamp


def new_run_root(outdir) -> Path:
    """Create a new timestamped results directory."""
    timestamp = datetime.now().strftime("%Y-%m-%d_%H-%M-%S")
    run_root = Path(outdir) / timestamp
    run_root.mkdir(parents=True, exist_ok=True)
    return run_root


def write_data(output_root: Path, filename: str, data: Any, format: str = 'both') -> List[Path]:
    """
    Write data to files in the specified format(s).

    Args:
        output_root: Directory to write files
        filename: Base filename (without extension)
        data: Data to write
        format: 'csv', 'json', or 'both'

    Returns:
        List of written file paths
    """
    output_root = Path(output_root)
    output_root.mkdir(parents=True, exist_ok=True)
    written_files = []

    # Only a list of flat records maps onto CSV; anything else goes to JSON.
    if format in ('csv', 'both') and isinstance(data, list) and data and isinstance(data[0], dict):
        csv_path = output_root / f"{filename}.csv"
        fieldnames = list(data[0].keys())
        with open(csv_path, 'w', newline='') as f:
            writer = csv.DictWriter(f, fieldnames=fieldnames, extrasaction='ignore')
            writer.writeheader()
            for row in data:
                writer.writerow({k: (json.dumps(v) if isinstance(v, (dict, list)) else v)
                                 for k, v in row.items()})
        written_files.append(csv_path)

    if format in ('json', 'both') or not written_files:
        json_path = output_root / f"{filename}.json"
        with open(json_path, 'w') as f:
            json.dump(data, f, indent=2, default=str)
        written_files.append(json_path)

    return written_files


def write_summary(output_root: Path, experiment_name: str, summary_data: Dict[str, Any]) -> Path:
    """Write a benchmark summary as a markdown file."""
    output_root = Path(output_root)
    summary_path = output_root / "SUMMARY.md"

    with open(summary_path, 'w') as f:
        f.write(f"# cryptoplug results: {experiment_name}\n\n")
        f.write(f"**Generated:** {get_timestamp()}\n")
        f.write(f"**Output Directory:** `{output_root}`\n\n")

        sysinfo = summary_data.get('system_info')
        if sysinfo:
            f.write("## System Information\n\n")
            f.write(f"- **Platform:** {sysinfo.get('system', {}).get('platform', 'Unknown')}\n")
            f.write(f"- **Python:** {sysinfo.get('python', {}).get('version', 'Unknown')}\n")
            for lib, version in sysinfo.get('libraries', {}).items():
                f.write(f"- **{lib}:** {version}\n")
            f.write("\n")

        by_algorithm = summary_data.get('summary', {}).get('by_algorithm', {})
        if by_algorithm:
            f.write("## Results Summary\n\n")
            f.write("| Algorithm | Runs | Avg MB/s | Max MB/s | Avg latency (ms) |\n")
            f.write("|---|---|---|---|---|\n")
            for name, stats in by_algorithm.items():
                f.write(f"| {name} | {stats['benchmark_count']} | "
                        f"{stats['avg_throughput_mbps']:.2f} | {stats['max_throughput_mbps']:.2f} | "
                        f"{stats['avg_latency_ms']:.4f} |\n")
            f.write("\n")

        f.write("## Files Generated\n\n")
        for file_path in sorted(output_root.glob("**/*")):
            if file_path.is_file() and file_path.name != "SUMMARY.md":
                f.write(f"- `{file_path.relative_to(output_root)}`\n")

    return summary_path
