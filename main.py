#!/usr/bin/env python3
import argparse
import os
import sys
import time

import numpy as np
from scipy import constants

import params
from capacitor import CapacitorParameters
from field_solver import RadialField
from search import find_minimum_voltage, scan_voltages
from diagnostics import save_params, sample_trajectory, plot_voltage_scan, plot_field_profile


# -----------------------------------------------------------------------------
# Command-line arguments
# -----------------------------------------------------------------------------
def build_parser():
    parser = argparse.ArgumentParser(
        description="Electron deflection in a coaxial cylindrical capacitor: "
                    "critical voltage search and trajectory plots"
    )
    # Geometry & beam, same order as the measured inputs
    parser.add_argument('r1', type=float, nargs='?', default=params.r1, help='Inner cylinder radius [m]')
    parser.add_argument('r2', type=float, nargs='?', default=params.r2, help='Outer cylinder radius [m]')
    parser.add_argument('v0', type=float, nargs='?', default=params.v0, help='Initial speed [m/s]')
    parser.add_argument('length', type=float, nargs='?', default=params.L, help='Capacitor length [m]')
    parser.add_argument('--voltage', type=float, default=None,
                        help='Voltage for the recorded trajectory (default: critical voltage)')
    parser.add_argument('--y0', type=float, default=None, help='Start distance from inner cylinder (default: mid-gap)')
    # Time-stepping
    parser.add_argument('--steps', type=int, default=params.steps_per_transit, help='Steps per transit time')
    parser.add_argument('--dt', type=float, default=None, help='Explicit time-step (overrides --steps)')
    parser.add_argument('--max_steps', type=int, default=params.max_steps, help='Step cap per run')
    # Search
    parser.add_argument('--low', type=float, default=params.U_low, help='Lower voltage bracket [V]')
    parser.add_argument('--high', type=float, default=params.U_high, help='Upper voltage bracket [V]')
    parser.add_argument('--tol', type=float, default=params.U_tol, help='Voltage tolerance [V]')
    parser.add_argument('--expand', action='store_true', help='Double the upper bracket until it captures')
    parser.add_argument('--codata', action='store_true', help='Use CODATA electron charge and mass')
    parser.add_argument('--scan', type=int, default=0, help='Number of points of a voltage scan (0: off)')
    # Output
    parser.add_argument('--outdir', type=str, default=params.outdir, help='Output directory')
    parser.add_argument('--show', action='store_true', help='Display figures')
    return parser


def make_parameters(args):
    charge, mass = params.e_charge, params.e_mass
    if args.codata:
        charge, mass = constants.e, constants.m_e
    return CapacitorParameters.from_geometry(
        args.r1, args.r2, args.v0, args.length,
        charge=charge, mass=mass, start_position=args.y0,
        steps_per_transit=args.steps, dt=args.dt, max_steps=args.max_steps,
    )


def run(args):
    p = make_parameters(args)
    os.makedirs(args.outdir, exist_ok=True)

    start_time = time.time()
    U_min = find_minimum_voltage(p, low=args.low, high=args.high, tol=args.tol, expand=args.expand)
    end_time = time.time()
    print(f"Minimum potential difference: {U_min}")
    print(f"Search Time: {end_time - start_time:.2f} s")

    U = U_min if args.voltage is None else args.voltage
    param_fn = save_params(args.outdir, p, {'U_min': U_min, 'U': U, 'tol': args.tol})
    print(f"Saved parameters to {param_fn}")

    trajectory, filenames = sample_trajectory(p, U, args.outdir, show=args.show)
    state = "captured by the inner cylinder" if trajectory.captured else "flew through"
    print(f"U = {U} V: {len(trajectory)} steps, particle {state} (final y = {trajectory.final_position:.3e} m)")
    for fn in filenames:
        print(f"Saved {fn}")

    field_fn = os.path.join(args.outdir, 'field_profile.png')
    plot_field_profile(RadialField(p), U, filename=field_fn, show=args.show)
    print(f"Saved field profile to {field_fn}")

    if args.scan > 0:
        voltages = np.linspace(args.low, 2 * U_min, args.scan)
        final_pos = scan_voltages(p, voltages)
        scan_fn = os.path.join(args.outdir, 'voltage_scan.png')
        plot_voltage_scan(voltages, final_pos, U_crit=U_min, filename=scan_fn, show=args.show)
        print(f"Saved voltage scan to {scan_fn}")
    return U_min


def main(argv=None):
    args = build_parser().parse_args(argv)
    try:
        run(args)
    except (ValueError, RuntimeError) as err:
        print(f"Error: {err}", file=sys.stderr)
        return 1
    return 0


# -----------------------------------------------------------------------------
# Script entry point
# -----------------------------------------------------------------------------
if __name__ == "__main__":
    sys.exit(main())
