#! /usr/bin/env python3
# -*- coding: utf-8 -*-

import numpy as np
import random
import sys
import time
import logging
# localization components
from mcl_localization.localizer import Localizer
# robot motion simulator
from mcl_localization.simulation import RobotSim
# configuration
from mcl_localization.utils import load_config, get_robot_params, print_config

# Load configuration
try:
    config = load_config("config.yaml")
    print("=== Configuration Loaded ===")
    print_config(config)
    print("=" * 30 + "\n")
except Exception as e:
    print(f"Error loading configuration: {e}")
    sys.exit(1)

logging.basicConfig(level=logging.INFO, format="%(levelname)s %(name)s: %(message)s")

# Set random seeds
seed = config.get('random_seed')
if seed is not None:
    random.seed(seed)
    np.random.seed(seed)
rng = np.random.default_rng(seed)

# = MAIN PROGRAM =

if __name__ == "__main__":
    # Control commands from config
    dx = config.predefined_control.dx
    dtheta = np.radians(config.predefined_control.dtheta)
    steps = config.predefined_control.steps

    # Initialize robot simulator with config parameters
    sim = RobotSim(rng=rng, **get_robot_params(config))

    # Initialize localizer on the simulator's world
    localizer = Localizer(config, sim.world, rng=rng)

    visualize = config.visualization.enabled
    if visualize:
        import matplotlib.pyplot as plt
        from mcl_localization.utils.visualization import (
            plot_particles, plot_scan, plot_grid_world, plot_trajectory
        )
        plt.ion()
        fig = plt.figure(figsize=(config.visualization.figure_width,
                                  config.visualization.figure_height))
        ax1 = plt.subplot(121)
        ax2 = plt.subplot(122)

    estimated_poses = []
    ground_truth_poses = []
    cycle_times = []

    for i in range(steps):
        # turn away when something is close ahead
        scan_ahead = sim.generateData()
        front = scan_ahead.ranges[len(scan_ahead.ranges) // 3: 2 * len(scan_ahead.ranges) // 3]
        cmd_dx, cmd_dtheta = (dx, dtheta) if np.nanmin(front) > 0.6 else (0.0, np.radians(15))

        try:
            scan, odom_pose, true_pose = sim.commandAndGetData(cmd_dx, cmd_dtheta)
        except Exception as e:
            print(repr(e))
            break

        start_time = time.time()
        result = localizer.process(scan, odom_pose, mount_lookup=lambda frame_id: sim.mount)
        cycle_times.append(time.time() - start_time)

        if result is None:
            if localizer.localization_lost:
                print(f"[{i}] localization lost")
            continue

        estimated_poses.append(result.mean_pose.as_tuple())
        ground_truth_poses.append(true_pose.as_tuple())

        # Update visualization with config frequency
        if visualize and i % config.visualization.update_frequency == 0:
            ax1.clear()
            ax1.set_title('Particle Distribution')
            plot_grid_world(ax1, sim.world)
            plot_particles(ax1, localizer.particle_filter.samples().poses(),
                           mean_pose=result.mean_pose, true_pose=true_pose)
            plot_scan(ax1, scan.with_mount(sim.mount), result.mean_pose, max_range=sim.rangeMax)

            ax2.clear()
            plot_trajectory(ax2, estimated_poses, ground_truth_poses)

            plt.draw()
            plt.pause(0.01)

    if visualize:
        plt.ioff()
        plt.show()

    # --- tracking summary ---
    if len(estimated_poses) > 0:
        est = np.array(estimated_poses)
        gt = np.array(ground_truth_poses)

        # Calculate errors
        pos_error = np.sqrt((est[:, 0] - gt[:, 0])**2 + (est[:, 1] - gt[:, 1])**2)
        theta_error = np.abs((est[:, 2] - gt[:, 2] + np.pi) % (2 * np.pi) - np.pi)

        print(f"\n=== Tracking Performance ===")
        print(f"Cycles: {len(est)}  mean cycle time: {1000 * np.mean(cycle_times):.1f} ms")
        print(f"Mean position error: {np.mean(pos_error):.3f} m")
        print(f"Max position error: {np.max(pos_error):.3f} m")
        print(f"Mean theta error: {np.degrees(np.mean(theta_error)):.2f}°")
        print(f"Max theta error: {np.degrees(np.max(theta_error)):.2f}°")
