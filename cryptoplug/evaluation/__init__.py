"""
Evaluation and benchmarking tools for cryptoplug.
"""

from .benchmark import BenchmarkResult, ProviderBenchmark, run_comprehensive_benchmark
from .runner import main as run_evaluation
from .results import new_run_root, write_data, write_summary
from .sysinfo import capture_system_info

__all__ = [
    'BenchmarkResult',
    'ProviderBenchmark',
    'run_comprehensive_benchmark',
    'run_evaluation',
    'new_run_root',
    'write_data',
    'write_summary',
    'capture_system_info'
]
