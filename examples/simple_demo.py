#!/usr/bin/env python3
"""
Simple Strided Matrix Demo

A minimal example showing matrices, sub-views, and mutable views.
"""

import sys
import os
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

import numpy as np
from strided import Matrix, BorrowError, configure_logging

configure_logging(level="INFO")

# A 4x4 row-major matrix holding 1..16
a = Matrix.new_row_major(4, 4, dtype=np.int64)
for row in range(a.nb_rows):
    for col in range(a.nb_cols):
        a[row, col] = row * a.nb_cols + col + 1

print("Matrix a:")
print(a.tolist())

# Zero-copy window over the centre of the matrix
with a.view(1, 1, 2, 2) as centre:
    print(f"\nCentre view {centre}:")
    print(centre.tolist())

    # The centre is lent out, so it cannot be borrowed mutably at the same time
    try:
        a.view_mut(0, 0, 2, 2)
    except BorrowError as exc:
        print(f"\nRejected: {exc}")

# Writes through a mutable view land in the owning matrix
with a.view_mut(2, 0, 2, 4) as bottom:
    for col in range(bottom.nb_cols):
        bottom[1, col] = 0

print("\nMatrix a after clearing its last row:")
print(a.tolist())

print("\n✓ Success!")
