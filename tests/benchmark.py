import time
import psutil
import os
import gc
from memory_profiler import profile
from ksa.suffix_array import ksa, naive_suffix_array
from ksa.utils import time_function
from tests.random_sequences import generate_random_sequences

DEFAULT_SEQUENCE_LENGTHS = [1000, 10000, 100000]
DEFAULT_ALPHABET_SIZE = 4
DEFAULT_ITERATIONS = 3
DEFAULT_VERIFY_LIMIT = 2000  # Longest sequence cross-checked against the naive construction


def get_process_memory():
    """Get current memory usage in MB"""
    process = psutil.Process(os.getpid())
    return process.memory_info().rss / 1024 / 1024


class BenchmarkResults:
    def __init__(self):
        self.construction_times = {}
        self.construction_memory = {}
        self.naive_times = {}
        self.mismatches = []
        self.total_time = 0
        self.peak_memory = 0


@profile
def benchmark_construction(sequence):
    """Measure suffix array construction time and memory"""
    gc.collect()  # Clear memory before start

    initial_memory = get_process_memory()
    start_time = time.time()

    suffix_array = ksa(sequence)

    construction_time = time.time() - start_time
    construction_memory = get_process_memory() - initial_memory

    return suffix_array, construction_time, construction_memory


def run_full_benchmark(sequence_lengths=DEFAULT_SEQUENCE_LENGTHS, alphabet_size=DEFAULT_ALPHABET_SIZE,
                       iterations=DEFAULT_ITERATIONS, verify_limit=DEFAULT_VERIFY_LIMIT, seed=None):
    """Run the construction benchmark over random sequences, averaging iterations"""
    results = BenchmarkResults()
    sequences = generate_random_sequences(sequence_lengths, alphabet_size, seed)

    print("\nBenchmarking suffix array construction...")
    for sequence in sequences:
        times = []
        memory = []

        print(f"\nSequence length: {len(sequence)}")
        for i in range(iterations):
            suffix_array, construction_time, construction_memory = benchmark_construction(sequence)
            times.append(construction_time)
            memory.append(construction_memory)
            print(f"Iteration {i+1}: Time={construction_time:.4f}s, Memory={construction_memory:.2f}MB")

        if len(sequence) <= verify_limit:
            expected, naive_time = time_function(naive_suffix_array)(sequence)
            results.naive_times[len(sequence)] = naive_time
            if suffix_array != expected:
                results.mismatches.append(len(sequence))
                print(f"MISMATCH against the naive construction for length {len(sequence)}")

        # Store average results
        results.construction_times[len(sequence)] = sum(times) / iterations
        results.construction_memory[len(sequence)] = sum(memory) / iterations

    results.total_time = sum(results.construction_times.values())
    results.peak_memory = max(results.construction_memory.values(), default=0)

    return results


def print_benchmark_summary(results):
    """Print formatted benchmark results"""
    print("\n=== Benchmark Summary ===")

    print("\nConstruction (averages):")
    print("Sequence Length | KSA (s)  | Naive (s) | Memory (MB)")
    print("-" * 55)
    for length in sorted(results.construction_times.keys()):
        naive = results.naive_times.get(length)
        naive_column = f"{naive:>9.4f}" if naive is not None else f"{'-':>9}"
        print(f"{length:>15} | {results.construction_times[length]:>8.4f} | {naive_column} | "
              f"{results.construction_memory[length]:>10.2f}")

    print("\nOverall:")
    print(f"Total Time: {results.total_time:.4f} seconds")
    print(f"Peak Memory: {results.peak_memory:.2f} MB")
    if results.mismatches:
        print(f"Mismatched lengths: {results.mismatches}")


if __name__ == "__main__":
    results = run_full_benchmark()
    print_benchmark_summary(results)
