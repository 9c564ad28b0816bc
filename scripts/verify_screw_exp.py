"""Check the closed-form dual quaternion exp/log against brute-force power series."""
import math

import torch

from screw_algebra.core.precision import set_scalar_dtype
from screw_algebra.algebra.dual_quaternion import DualQuaternion

set_scalar_dtype("float64")

TERMS = 40
TOLERANCE = 1e-10


def series_exp(generator):
    """Sum G^n / n! for n < TERMS."""
    result = DualQuaternion.identity()
    term = DualQuaternion.identity()
    for n in range(1, TERMS):
        term = term * generator * (1.0 / n)
        result = result + term
    return result


# Generators spanning tiny, moderate and large rotations, with and without
# a dual part, plus rotation magnitudes right at the series threshold
torch.manual_seed(0)
generators = [
    DualQuaternion.new(),
    DualQuaternion.new(ie=0.4, je=-1.0, ke=2.0),
    DualQuaternion.new(i=1e-7, ie=0.3),
    DualQuaternion.new(i=math.sqrt(1e-6) * 0.999, je=1.0),
    DualQuaternion.new(i=math.sqrt(1e-6) * 1.001, je=1.0),
    DualQuaternion.new(k=math.pi / 2, ie=1.0, ke=0.5),
]
for _ in range(20):
    v = torch.randn(3) * torch.rand(1) * 1.5
    m = torch.randn(3)
    generators.append(DualQuaternion.new(i=v[0], j=v[1], k=v[2], ie=m[0], je=m[1], ke=m[2]))

errors = []

for idx, g in enumerate(generators):
    closed = g.exp()
    brute = series_exp(g)
    exp_error = (closed.dq - brute.dq).abs().max().item()

    # log is the principal branch, so it only inverts exp below half a turn
    r = g.real_vector.norm().item()
    log_error = (closed.log().dq - g.dq).abs().max().item() if r < math.pi else 0.0

    if exp_error > TOLERANCE or log_error > TOLERANCE:
        errors.append((idx, r, exp_error, log_error))

print(f"Checked {len(generators)} generators, found {len(errors)} discrepancies:")
for idx, r, exp_error, log_error in errors:
    print(f"  generator {idx} (|v| = {r:.3g})")
    print(f"    exp error: {exp_error:.3e}")
    print(f"    log error: {log_error:.3e}")
