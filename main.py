# main.py
"""
Main entry point for the Mono no Aware garden.

This script orchestrates the entire lifecycle:
1. Loads configuration from `config.json`.
2. Initializes the logging system.
3. Opens the window and builds the simulation context around its size.
4. Runs the main loop: advance one tick, then handle input and paint.
5. Handles clean shutdown.
"""
import logging
import cProfile
import pstats
import io

from utils import setup_logging, load_config

def main():
    """
    The main function to run the garden.
    """
    # Load configuration from the JSON file first.
    # Logging is not set up yet, so we use a print for this one error.
    try:
        config = load_config('config.json')
    except Exception as e:
        print(f"FATAL: Could not load config.json. Error: {e}")
        return

    setup_logging(config)

    logging.info("--- Mono no Aware Starting ---")

    sim_params = config.get('simulation_parameters', {})
    run_params = config.get('run_control', {})
    vis_params = config.get('visualization', {})

    from input_adapter import InputAdapter
    from simulation import Simulation
    from state import SimulationContext
    from visualization import Visualizer

    # --- Component Initialization ---
    # 1. The visualizer opens the window, which decides the viewport size.
    visualizer = Visualizer(vis_params)
    width, height = visualizer.size

    # 2. Everything else is built around that size.
    context = SimulationContext(
        sim_params, width, height, is_night=vis_params.get('start_at_night', False)
    )
    sim = Simulation(context)
    input_adapter = InputAdapter(context)

    profiler = cProfile.Profile() if run_params.get('profile', False) else None

    log_throttle = run_params.get('log_throttle_steps', 600)
    max_steps = run_params.get('max_steps', 0)  # 0 runs until the window closes

    running = True
    step_num = 0

    if profiler:
        profiler.enable()
    while running:
        sim.step()
        step_num += 1

        # The visualizer's draw method controls the loop by checking for
        # the QUIT event. It returns False if the user quits.
        if not visualizer.draw(context, input_adapter):
            running = False

        # Hot loops must throttle logs
        if step_num % log_throttle == 0:
            stats = sim.stats()
            logging.info(f"Tick {step_num}")
            logging.debug(
                f"Tick {step_num} | stems {stats['stems']}, flowers {stats['flowers']}, "
                f"rain {stats['rain_drops']}, petals {stats['petals']}, "
                f"splashes {stats['splashes']}, vase {stats['fill_ratio']:.0%} full"
            )

        if max_steps and step_num >= max_steps:
            logging.info(f"Reached max_steps ({max_steps}). Stopping.")
            running = False
    if profiler:
        profiler.disable()

    visualizer.close()
    logging.info(f"Main loop finished after {step_num} ticks; {sim.drops_collected} drops collected.")

    if profiler:
        logging.info("--- Performance Profile ---")
        s = io.StringIO()
        # Sort by cumulative time spent in the function
        stats = pstats.Stats(profiler, stream=s).sort_stats('cumtime')
        stats.print_stats(20) # Print top 20 slowest functions
        logging.info(f"\n{s.getvalue()}")

    logging.info("--- Mono no Aware Shutting Down ---")


if __name__ == "__main__":
    main()
