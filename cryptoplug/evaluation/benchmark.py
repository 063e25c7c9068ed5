"""
Benchmark module for performance evaluation of provider algorithms.

Measures digest, cipher and key derivation throughput for catalogue names,
together with process memory usage around each run.
"""

import gc
import statistics
import time
from dataclasses import dataclass, asdict
from typing import Any, Dict, List, Optional

import psutil

from ..catalogue import CATALOGUE, CipherDescriptor, DigestDescriptor, KdfDescriptor
from ..context import Direction
from ..provider import Provider
from ..utils.memory import SecureBytes


@dataclass
class BenchmarkResult:
    """Container for benchmark results."""
    name: str
    algorithm: str
    operation: str
    message_size: int
    iterations: int
    total_time: float
    avg_time: float
    throughput_mbps: float
    memory_usage: Optional[Dict[str, float]] = None

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


def _throughput(size: int, iterations: int, total_time: float) -> float:
    if total_time <= 0:
        return 0.0
    return (size * iterations) / total_time / 1024 / 1024


class ProviderBenchmark:
    """
    Performance benchmarking for the algorithms a provider advertises.
    """

    def __init__(self, provider: Optional[Provider] = None):
        self.provider = provider if provider is not None else Provider()
        self.results: List[BenchmarkResult] = []

    def measure_memory_usage(self) -> Dict[str, float]:
        """
        Measure current memory usage.

        Returns:
            Dictionary with memory statistics in MB
        """
        process = psutil.Process()
        memory_info = process.memory_info()

        return {
            'rss': memory_info.rss / 1024 / 1024,
            'vms': memory_info.vms / 1024 / 1024,
            'percent': process.memory_percent()
        }

    def _record(self, name: str, operation: str, size: int, iterations: int,
                timings: List[float], memory_before: Dict[str, float]) -> BenchmarkResult:
        memory_after = self.measure_memory_usage()
        total_time = sum(timings)
        result = BenchmarkResult(
            name=f"{operation}-{name}-{size}B",
            algorithm=name,
            operation=operation,
            message_size=size,
            iterations=iterations,
            total_time=total_time,
            avg_time=statistics.mean(timings),
            throughput_mbps=_throughput(size, iterations, total_time),
            memory_usage={
                'rss_delta': memory_after['rss'] - memory_before['rss'],
                'vms_delta': memory_after['vms'] - memory_before['vms']
            }
        )
        self.results.append(result)
        return result

    def benchmark_digest(self, name: str, message_sizes: List[int],
                         iterations: int = 1000) -> List[BenchmarkResult]:
        """
        Benchmark one digest across message sizes.

        Args:
            name: Digest algorithm name
            message_sizes: List of message sizes to test
            iterations: Number of iterations per size

        Returns:
            List of benchmark results
        """
        results = []
        for size in message_sizes:
            gc.collect()
            memory_before = self.measure_memory_usage()
            message = bytes(size)
            timings = []

            with self.provider.create_context(name) as ctx:
                for _ in range(iterations):
                    start = time.perf_counter()
                    ctx.clear()
                    ctx.update(message)
                    ctx.final()
                    timings.append(time.perf_counter() - start)

            results.append(self._record(name, "digest", size, iterations, timings, memory_before))
        return results

    def benchmark_cipher(self, name: str, message_sizes: List[int],
                         iterations: int = 1000,
                         direction: Direction = Direction.ENCRYPT) -> List[BenchmarkResult]:
        """
        Benchmark one cipher across message sizes.

        Sizes are rounded up to the cipher block size so that ECB and CBC
        receive aligned input.
        """
        results = []
        probe = self.provider.create_context(name)
        block = probe.block_size()
        key = bytes(range(1, probe.key_length().maximum + 1))
        iv = bytes(block)
        probe.release()

        for size in message_sizes:
            aligned = -(-size // block) * block
            gc.collect()
            memory_before = self.measure_memory_usage()
            message = bytes(aligned)
            timings = []

            with self.provider.create_context(name) as ctx:
                for _ in range(iterations):
                    start = time.perf_counter()
                    ctx.configure(direction, key, iv)
                    ctx.update(message)
                    ctx.final()
                    timings.append(time.perf_counter() - start)

            results.append(self._record(name, direction.value, aligned, iterations, timings, memory_before))
        return results

    def benchmark_kdf(self, name: str, iteration_counts: List[int],
                      repetitions: int = 10, key_length: int = 32) -> List[BenchmarkResult]:
        """
        Benchmark key derivation cost for several PBKDF2 iteration counts.

        ``message_size`` of each result holds the iteration count.
        """
        results = []
        with SecureBytes(b"benchmark password") as secret:
            for count in iteration_counts:
                gc.collect()
                memory_before = self.measure_memory_usage()
                timings = []

                with self.provider.create_context(name) as ctx:
                    for _ in range(repetitions):
                        start = time.perf_counter()
                        ctx.make_key(bytes(secret), b"benchmark salt", key_length, count)
                        timings.append(time.perf_counter() - start)

                result = self._record(name, "derive", count, repetitions, timings, memory_before)
                result.throughput_mbps = 0.0
                results.append(result)
        return results

    def benchmark_all(self, message_sizes: List[int], iterations: int,
                      kdf_iteration_counts: Optional[List[int]] = None) -> Dict[str, List[BenchmarkResult]]:
        """Benchmark every catalogue entry of the provider."""
        if kdf_iteration_counts is None:
            kdf_iteration_counts = [1000]

        by_name = {}
        for name in self.provider.features():
            descriptor = CATALOGUE[name]
            if isinstance(descriptor, DigestDescriptor):
                by_name[name] = self.benchmark_digest(name, message_sizes, iterations)
            elif isinstance(descriptor, CipherDescriptor):
                by_name[name] = (self.benchmark_cipher(name, message_sizes, iterations, Direction.ENCRYPT)
                                 + self.benchmark_cipher(name, message_sizes, iterations, Direction.DECRYPT))
            elif isinstance(descriptor, KdfDescriptor):
                by_name[name] = self.benchmark_kdf(name, kdf_iteration_counts)
        return by_name

    def get_summary_report(self) -> Dict[str, Any]:
        """
        Generate summary report of all benchmark results.

        Returns:
            Summary grouped by algorithm
        """
        if not self.results:
            return {'error': 'No benchmark results available'}

        by_algorithm = {}
        for result in self.results:
            by_algorithm.setdefault(result.algorithm, []).append(result)

        summary = {
            'total_benchmarks': len(self.results),
            'algorithms_tested': list(by_algorithm.keys()),
            'by_algorithm': {}
        }

        for algorithm, results in by_algorithm.items():
            throughputs = [r.throughput_mbps for r in results]
            latencies = [r.avg_time for r in results]

            summary['by_algorithm'][algorithm] = {
                'benchmark_count': len(results),
                'avg_throughput_mbps': statistics.mean(throughputs),
                'max_throughput_mbps': max(throughputs),
                'avg_latency_ms': statistics.mean(latencies) * 1000,
                'min_latency_ms': min(latencies) * 1000,
                'sizes_tested': sorted(set(r.message_size for r in results))
            }

        return summary


def run_comprehensive_benchmark(provider: Optional[Provider] = None,
                                quick: bool = False,
                                iterations: Optional[int] = None) -> Dict[str, Any]:
    """
    Run the benchmark suite over the whole catalogue.

    Args:
        provider: Provider to benchmark (a default one is created if omitted)
        quick: If True, run reduced test set for faster execution
        iterations: Iterations per size, overriding the provider configuration

    Returns:
        Summary and raw results
    """
    benchmark = ProviderBenchmark(provider)

    if quick:
        message_sizes = [64, 1024]
        iterations = iterations or 20
        kdf_counts = [100]
    else:
        message_sizes = [16, 64, 256, 1024, 4096, 16384]
        iterations = iterations or benchmark.provider.config.benchmark_iterations
        kdf_counts = [1000, 10000, 100000]

    by_name = benchmark.benchmark_all(message_sizes, iterations, kdf_counts)

    return {
        'summary': benchmark.get_summary_report(),
        'by_algorithm': {name: [r.to_dict() for r in results]
                         for name, results in by_name.items()},
        'raw_results': [r.to_dict() for r in benchmark.results]
    }
