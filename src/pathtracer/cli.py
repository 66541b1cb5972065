# cli.py
"""
Command-line entry point.

    python -m pathtracer --scene examples/scene.yaml --samples 64 --output out.png
    python -m pathtracer --width 200 --height 100 --preview
"""
import argparse
import logging
import random
import sys
from typing import List, Optional

from pathtracer.errors import PathTracerError
from pathtracer.renderer.renderer import Renderer
from pathtracer.scene import demo_scene, load_scene

logger = logging.getLogger("pathtracer")


def setup_logging(level: str = "INFO") -> None:
    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.INFO),
        format="%(asctime)s %(name)s [%(levelname)s] %(message)s",
        datefmt="%H:%M:%S",
    )


def parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        prog="pathtracer",
        description="Offline Monte-Carlo path tracer.",
    )
    parser.add_argument("--scene", help="YAML scene file (default: built-in demo scene)")
    parser.add_argument("--output", "-o", default="render.png",
                        help="Output image; .ppm writes ASCII PPM, anything else goes through Pillow")
    parser.add_argument("--width", type=int, help="Image width in pixels")
    parser.add_argument("--height", type=int, help="Image height in pixels")
    parser.add_argument("--samples", type=int, help="Passes (samples per pixel)")
    parser.add_argument("--bounces", type=int, help="Maximum scatter events per path")
    parser.add_argument("--workers", type=int, help="Worker processes (default: CPU count)")
    parser.add_argument("--seed", type=int, help="Seed for reproducible renders")
    parser.add_argument("--progress", action="store_true", help="Show a progress bar")
    parser.add_argument("--preview", action="store_true", help="Open a live preview window")
    parser.add_argument("--log-level", default="INFO",
                        choices=["DEBUG", "INFO", "WARNING", "ERROR"])
    return parser.parse_args(argv)


def run(args: argparse.Namespace):
    rng = random.Random(args.seed) if args.seed is not None else random.Random()
    scene = load_scene(args.scene, rng=rng) if args.scene else demo_scene(rng=rng)

    settings = scene.render.merged(
        width=args.width,
        height=args.height,
        samples=args.samples,
        bounces=args.bounces,
        workers=args.workers,
        seed=args.seed,
    )
    camera = scene.camera.build(settings.aspect_ratio)
    renderer = settings.configure(Renderer(scene.world, camera))
    if args.progress:
        renderer.with_cli_progress_tracker()

    if args.preview:
        from pathtracer.renderer.preview import LivePreview
        from pathtracer.renderer.worker import RenderWorker

        preview = LivePreview(settings.width, settings.height)
        try:
            worker = RenderWorker(renderer, settings.samples).start()
            render = preview.follow(worker)
            if render is None:
                return None
            render.save(args.output)
            preview.wait_for_close()
        finally:
            preview.close()
        return render

    render = renderer.render()
    render.save(args.output)
    return render


def main(argv: Optional[List[str]] = None) -> int:
    args = parse_args(argv)
    setup_logging(args.log_level)
    try:
        render = run(args)
    except PathTracerError as exc:
        logger.error("%s", exc)
        return 1
    except KeyboardInterrupt:
        logger.warning("Interrupted")
        return 130
    if render is None:
        logger.warning("Render did not complete, nothing written")
        return 1
    logger.info("Saved %s", args.output)
    return 0


if __name__ == "__main__":
    sys.exit(main())
