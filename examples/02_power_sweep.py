"""
Power Sweep Example
===================

Sweeps sample size and number of categories, then renders the power
surfaces of both tests as heat maps.
"""

from mcuniform import MCUniform

print("=" * 60)
print("POWER SWEEP EXAMPLE")
print("=" * 60)

model = MCUniform()
model.set_simulations(1000)
model.set_parallel(True)

# 1. Simulated sweep on a small grid
print("\n1. SIMULATED SWEEP:")
result = model.sweep(
    sample_sizes=[2000, 5000, 10000, 20000],
    bins=[2, 5, 10, 20],
)

# 2. Closed-form chi-square power on a much finer grid
print("\n2. ANALYTIC SWEEP:")
analytic = model.analytic_sweep(
    sample_sizes=list(range(1000, 50001, 1000)),
    bins=list(range(2, 51)),
)

# 3. Render (one panel per test)
model.plot(result, title="Simulated power", output_path="simulated_power.png", show=False)
model.plot(analytic, title="Analytic chi-square power", output_path="analytic_power.png", show=False)
print("\nFigures written to simulated_power.png and analytic_power.png")
