"""Entry point for the headless lunar mission simulator."""
from __future__ import annotations

from pathlib import Path

import pygame

from mission.assets.content import ContentManager, default_assets_root
from mission.control.controller import MissionController
from mission.engine.logger import init_logger
from mission.engine.loop import RealtimeFrameLoop
from mission.engine.settings import SimulationSettings

SETTINGS_PATH = Path("settings.json")
STATUS_INTERVAL = 2.0


def main() -> None:
    settings = SimulationSettings.load(SETTINGS_PATH)
    logger = init_logger(SETTINGS_PATH)
    status = logger.channel("sim")

    assets_root = settings.assets_root
    if not (assets_root / "data").exists():
        assets_root = default_assets_root()
    content = ContentManager(assets_root)
    content.load()

    pygame.init()
    loop = RealtimeFrameLoop(
        max_fps=settings.max_fps,
        stop_when_idle=settings.stop_on_complete,
    )
    controller = MissionController(
        content.trajectories.all(),
        loop,
        initial_trajectory=settings.initial_trajectory,
        seed_logs=content.logs.all(),
        history_points=settings.history_points,
        logger=logger.channel("control"),
        engine_logger=status,
    )
    controller.engine.telemetry_logger = logger.channel("telemetry")
    controller.engine.hazard_logger = logger.channel("hazards")
    controller.advisor.logger = logger.channel("advisory")
    controller.set_time_scale(settings.time_scale)

    last_report = [loop.now()]

    def report(now: float) -> None:
        if now - last_report[0] < STATUS_INTERVAL:
            return
        last_report[0] = now
        state, metrics = controller.state, controller.metrics
        status.info(
            "T+%.1fh %s fuel=%.1f%% dist=%.0fkm rad=%.0f%% %s/%s",
            state.current_time,
            state.current_phase,
            state.fuel_remaining,
            metrics.distance_to_target,
            metrics.radiation_exposure,
            metrics.systems_status.value,
            metrics.hazard_level.value,
        )

    loop.on_frame = report
    controller.start()
    try:
        loop.run()
    except KeyboardInterrupt:
        controller.pause()
    finally:
        controller.close()
        pygame.quit()
        final = controller.engine.get_state()
        print(f"\nFinal phase: {final.current_phase} at T+{final.current_time:.1f}h")
        print(f"Fuel remaining: {final.fuel_remaining:.1f}%")
        print(f"Mission log entries: {len(controller.logs)}")


if __name__ == "__main__":
    main()
