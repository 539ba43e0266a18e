"""
Basic Power Analysis Example
============================

This example estimates how often the chi-square test and the range test
detect a die-like process whose first two faces are off by ±5%.
"""

from mcuniform import MCUniform

# Example: a 10-category process where two categories drift by ±5% (relative).
# Research question: with 1000 observations, how likely are we to notice?

print("=" * 60)
print("BASIC POWER ANALYSIS EXAMPLE")
print("=" * 60)

# 1. Configure the analysis
model = MCUniform()
model.set_alpha(0.01)           # Significance level for both tests
model.set_percent_error(0.1)    # Categories 0 and 1 at (1 ∓ 0.05)/bins
model.set_simulations(5000)     # Replicates per cell

# 2. Simulated power for a single design
print("\n1. SIMULATED POWER (n=1000, 10 categories):")
model.find_power(sample_size=1000, bins=10)

# 3. A larger design
print("\n2. SIMULATED POWER (n=50000, 10 categories):")
model.find_power(sample_size=50000, bins=10)

print("\n" + "=" * 60)
print("INTERPRETATION GUIDE")
print("=" * 60)
print("""
Key takeaways:
- 'Chi-square (analytic)' is the closed-form noncentral chi-square power
  and should match the simulated chi-square power within Monte Carlo noise
- The range test reacts to the gap between the largest and smallest count,
  so it is most sensitive when few categories are perturbed
- Power grows with sample size and shrinks as the perturbation is spread
  over more categories
""")
