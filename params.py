#-------------------------
# Particle parameters
#-------------------------
e_charge = 1.6e-19    # electron's charge magnitude [C]
e_mass   = 9.1e-31    # electron's mass [kg]

#-------------------------
# Capacitor geometry & beam (example scenario)
#-------------------------
r1 = 0.01     # inner cylinder radius [m]
r2 = 0.02     # outer cylinder radius [m]
v0 = 1.0e6    # initial longitudinal speed [m/s]
L  = 0.1      # capacitor length [m]

#-------------------------
# Time-stepping
#-------------------------
steps_per_transit = 1000      # dt = L / (v0 * steps_per_transit)
max_steps = 10_000_000        # hard cap on steps of a single run

#-------------------------
# Critical voltage search
#-------------------------
U_low  = 0.0      # lower bracket [V]
U_high = 1000.0   # upper bracket [V]
U_tol  = 1e-5     # bisection tolerance [V]
max_expansions = 60   # bracket doublings allowed when expanding

outdir = 'results'
