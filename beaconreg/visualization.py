"""Visualization utilities for registration results."""

import matplotlib.pyplot as plt
import numpy as np

from .transforms import points_to_array


def plot_registration_progress(result, save_path='registration_progress.png', show=True):
    """
    Plot the growth of the global beacon set over the registration sweeps.

    Args:
        result: RegistrationResult
        save_path: Path to save the plot
        show: Whether to open a plot window
    """
    history = result.beacon_count_history
    fig, ax = plt.subplots(figsize=(12, 7))

    ax.plot(range(len(history)), history, marker='o', linewidth=2, markersize=6,
            color='#2E86AB', label='Global Beacons')

    # Annotate which scanners were fixed in each sweep
    for sweep in result.sweeps:
        fixed = ', '.join(str(i) for i in sweep['fixed'])
        ax.annotate(f"+[{fixed}]", (sweep['sweep'], sweep['beacon_count']),
                    textcoords='offset points', xytext=(0, 10), ha='center', fontsize=9)

    ax.set_xlabel('Sweep', fontsize=12)
    ax.set_ylabel('Unique Beacons', fontsize=12)
    ax.set_xticks(range(len(history)))
    ax.set_title(f"Scanner Registration\n{len(result.scanner_positions)} scanners, "
                 f"{result.beacon_count} beacons (threshold {result.threshold})",
                 fontsize=14, fontweight='bold')
    ax.grid(True, alpha=0.3)
    ax.legend(loc='best')

    plt.tight_layout()
    plt.savefig(save_path, dpi=150)
    print(f"Progress plot saved to '{save_path}'")
    if show:
        plt.show()
    plt.close(fig)


def plot_scanner_layout(result, save_path='scanner_layout.png', show=True):
    """
    3D scatter of the global beacons and scanner positions.

    The two scanners farthest apart (Manhattan distance) are joined by a line.

    Args:
        result: RegistrationResult
        save_path: Path to save the plot
        show: Whether to open a plot window
    """
    beacons = points_to_array(result.beacons)
    scanner_ids = sorted(result.scanner_positions)
    scanners = np.array([tuple(result.scanner_positions[i]) for i in scanner_ids])

    fig = plt.figure(figsize=(12, 9))
    ax = fig.add_subplot(111, projection='3d')

    ax.scatter(beacons[:, 0], beacons[:, 1], beacons[:, 2], s=8, c='blue', alpha=0.5,
               label='Beacons')
    ax.scatter(scanners[:, 0], scanners[:, 1], scanners[:, 2], s=60, c='red', marker='^',
               label='Scanners')
    for scanner_id, position in zip(scanner_ids, scanners):
        ax.text(position[0], position[1], position[2], f" {scanner_id}", fontsize=9)

    farthest = result.max_scanner_distance()
    if farthest is not None:
        distance, (_, pos_a), (_, pos_b) = farthest
        line = np.array([tuple(pos_a), tuple(pos_b)])
        ax.plot(line[:, 0], line[:, 1], line[:, 2], color='green', linestyle='--',
                label=f'Max distance ({distance})')

    ax.set_xlabel('X')
    ax.set_ylabel('Y')
    ax.set_zlabel('Z')
    ax.set_title(f"Scanner Layout (anchor: scanner {result.anchor_id})",
                 fontsize=14, fontweight='bold')
    ax.legend(loc='best')

    plt.tight_layout()
    plt.savefig(save_path, dpi=150)
    print(f"Layout plot saved to '{save_path}'")
    if show:
        plt.show()
    plt.close(fig)


def show_registration(result):
    """Interactive Open3D view: beacons in blue, scanner positions in red."""
    # open3d is an optional install
    import open3d as o3d

    beacon_pcd = o3d.geometry.PointCloud()
    beacon_pcd.points = o3d.utility.Vector3dVector(points_to_array(result.beacons).astype(float))
    beacon_pcd.paint_uniform_color([0, 0, 1])

    scanner_pcd = o3d.geometry.PointCloud()
    scanner_pcd.points = o3d.utility.Vector3dVector(
        points_to_array(result.scanner_positions.values()).astype(float)
    )
    scanner_pcd.paint_uniform_color([1, 0, 0])

    o3d.visualization.draw_geometries(
        [beacon_pcd, scanner_pcd],
        window_name=f"Registered Scanners ({result.beacon_count} beacons)",
        width=1024,
        height=768
    )
