import csv
import os

import numpy as np
import matplotlib.pyplot as plt

from particles import simulate_trajectory


def save_params(outdir, params, extra=None):
    """
    Write the run parameters to ``outdir/params.txt``.

    Parameters
    ----------
    outdir : str
        Output directory, created if missing.
    params : CapacitorParameters
        Simulation parameters.
    extra : dict, optional
        Additional ``key = value`` entries (voltages, tolerances...).

    Returns
    -------
    param_fn : str
        Path of the written file.
    """
    os.makedirs(outdir, exist_ok=True)
    param_fn = os.path.join(outdir, 'params.txt')
    entries = dict(params.as_dict())
    if extra:
        entries.update(extra)
    with open(param_fn, 'w') as pf:
        pf.write("# Coaxial capacitor simulation parameters\n")
        for key, val in entries.items():
            pf.write(f"{key} = {val}\n")
    return param_fn


def save_trajectory_csv(csv_fn, trajectory):
    """
    Save a recorded trajectory to CSV with columns t, x, pos, a, vy.

    Parameters
    ----------
    csv_fn : str
        Filename for CSV output.
    trajectory : Trajectory
        Recorded run.
    """
    with open(csv_fn, 'w', newline='') as f:
        writer = csv.writer(f)
        writer.writerow(['t', 'x', 'pos', 'a', 'vy'])
        for sample in trajectory.samples():
            writer.writerow(list(sample))


def _line_plot(x, y, xlabel, ylabel, title, filename, show=False, fontsize=14):
    plt.figure()
    plt.plot(x, y, '-')
    plt.xlabel(xlabel, fontsize=fontsize)
    plt.ylabel(ylabel, fontsize=fontsize)
    plt.xticks(fontsize=fontsize)
    plt.yticks(fontsize=fontsize)
    plt.title(title, fontsize=fontsize)
    plt.grid(True)
    plt.tight_layout()
    plt.savefig(filename)
    if show:
        plt.show()
    plt.close()


def plot_trajectory(trajectory, outdir, show=False, fontsize=14):
    """
    Plot the four trajectory charts of a recorded run.

    Produces y(x), y(t), Vy(t) and a(t), where y is the distance from the
    inner cylinder and x the lateral displacement vy*t.

    Parameters
    ----------
    trajectory : Trajectory
        Recorded run.
    outdir : str
        Directory for the PNG files.
    show : bool, optional
        Display each figure after saving.
    fontsize : int, optional
        Font size for labels and ticks.

    Returns
    -------
    filenames : list of str
        Paths of the saved figures.
    """
    os.makedirs(outdir, exist_ok=True)
    U = trajectory.voltage
    charts = [
        (trajectory.x, trajectory.pos, 'x, m', 'y, m', f'y(x), U = {U:.5g} V', 'graph_y_x.png'),
        (trajectory.t, trajectory.pos, 't, s', 'y, m', f'y(t), U = {U:.5g} V', 'graph_y_t.png'),
        (trajectory.t, trajectory.vy, 't, s', r'$V_y$, m/s', r'$V_y(t)$' + f', U = {U:.5g} V', 'graph_vy_t.png'),
        (trajectory.t, trajectory.a, 't, s', r'a, m/s$^2$', f'a(t), U = {U:.5g} V', 'graph_a_t.png'),
    ]
    filenames = []
    for x, y, xlabel, ylabel, title, name in charts:
        filename = os.path.join(outdir, name)
        _line_plot(x, y, xlabel, ylabel, title, filename, show=show, fontsize=fontsize)
        filenames.append(filename)
    return filenames


def plot_voltage_scan(voltages, final_pos, U_crit=None, filename=None, show=False, fontsize=14):
    """
    Plot the final transverse position against the applied voltage.

    Parameters
    ----------
    voltages : array_like
        Scanned voltages.
    final_pos : array_like
        Final position for each voltage.
    U_crit : float, optional
        Critical voltage to mark with a vertical line.
    filename : str, optional
        Path to save the figure.
    """
    plt.figure()
    plt.plot(voltages, final_pos, 'o-', label='final position')
    plt.axhline(0.0, color='k', lw=0.8)
    if U_crit is not None:
        plt.axvline(U_crit, color='r', ls='--', label=r'U$_{min}$ = ' + f'{U_crit:.5f} V')
    plt.xlabel('U, V', fontsize=fontsize)
    plt.ylabel('final y, m', fontsize=fontsize)
    plt.title('Final position vs potential difference', fontsize=fontsize)
    plt.grid(True)
    plt.legend(fontsize=fontsize)
    plt.tight_layout()
    if filename is not None:
        plt.savefig(filename)
    if show:
        plt.show()
    plt.close()


def plot_field_profile(field, voltage, filename=None, npoints=200, show=False, fontsize=14):
    """
    Plot E(r) across the gap between the cylinders.

    Parameters
    ----------
    field : RadialField
        Field model.
    voltage : float
        Potential difference [V].
    filename : str, optional
        Path to save the figure.
    npoints : int, optional
        Number of radial samples.

    Returns
    -------
    r, E : ndarray
        Radial samples and field magnitude.
    """
    p = field.params
    r = np.linspace(p.inner_radius, p.outer_radius, npoints)
    E = field.field_strength(voltage, r)
    plt.figure()
    plt.plot(r, E, '-')
    plt.xlabel('r, m', fontsize=fontsize)
    plt.ylabel('E, V/m', fontsize=fontsize)
    plt.title(f'Radial field, U = {voltage:.5g} V', fontsize=fontsize)
    plt.grid(True)
    plt.tight_layout()
    if filename is not None:
        plt.savefig(filename)
    if show:
        plt.show()
    plt.close()
    return r, E


def sample_trajectory(params, voltage, outdir, show=False):
    """
    Record a run at ``voltage`` and hand its arrays to the plotting and CSV
    writers.

    Returns
    -------
    trajectory : Trajectory
        The recorded run.
    filenames : list of str
        Saved CSV and figure paths.
    """
    trajectory = simulate_trajectory(params, voltage)
    os.makedirs(outdir, exist_ok=True)
    csv_fn = os.path.join(outdir, 'trajectory.csv')
    save_trajectory_csv(csv_fn, trajectory)
    filenames = [csv_fn] + plot_trajectory(trajectory, outdir, show=show)
    return trajectory, filenames
