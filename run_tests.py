"""
Test runner script for the chargefield package.

Run this script to execute the test suite and verify implementation correctness.
"""

import sys
import pytest
import torch

def main():
    """Run all tests with detailed output."""
    print("Running chargefield Tests")
    print("=" * 50)

    # Check PyTorch availability
    print(f"PyTorch version: {torch.__version__}")
    print(f"CUDA available: {torch.cuda.is_available()}")

    print("\nRunning tests...")

    # Run tests with verbose output
    exit_code = pytest.main([
        "tests",
        "-v",  # Verbose output
        "--tb=short",  # Short traceback format
        "--durations=10",  # Show 10 slowest tests
        "-x"  # Stop on first failure
    ])

    if exit_code == 0:
        print("\n✓ All tests passed successfully!")
    else:
        print(f"\n✗ Tests failed with exit code {exit_code}")

    return exit_code


if __name__ == "__main__":
    sys.exit(main())
