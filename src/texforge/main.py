"""Main entry point for texforge."""

import argparse
import logging
import time
from pathlib import Path

from .materials import MaterialLoader
from .textures import RECIPES, QualityTier, TextureGenerator
from .textures.errors import TextureError


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    """Parse command line arguments."""
    parser = argparse.ArgumentParser(
        description="Texforge - Procedural PBR Texture Synthesizer",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument(
        "-r", "--recipe",
        choices=[*RECIPES.keys(), "all"],
        default="all",
        help="Recipe to synthesize (default: all)",
    )
    parser.add_argument(
        "-m", "--material",
        metavar="NAME",
        help="Synthesize a material defined in assets/materials/NAME.yaml instead of a bare recipe",
    )
    parser.add_argument(
        "--resolution",
        type=int,
        help="Texture resolution in pixels (default: from --quality)",
    )
    parser.add_argument(
        "-q", "--quality",
        choices=[tier.value for tier in QualityTier],
        default=QualityTier.MEDIUM.value,
        help="Quality preset used when --resolution is not given (default: medium)",
    )
    parser.add_argument(
        "--seed",
        type=int,
        help="Noise seed for reproducible output (default: random)",
    )
    parser.add_argument(
        "-o", "--output",
        metavar="DIR",
        default="textures_out",
        help="Output directory for PNG maps (default: textures_out)",
    )
    parser.add_argument(
        "-v", "--verbose",
        action="store_true",
        help="Enable debug logging",
    )
    return parser.parse_args(argv)


def main(argv: list[str] | None = None) -> int:
    """Run the texforge command line tool."""
    args = parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    try:
        if args.resolution is not None:
            generator = TextureGenerator(resolution=args.resolution, seed=args.seed)
        else:
            generator = TextureGenerator.from_quality(args.quality, seed=args.seed)
    except TextureError as exc:
        print(f"error: {exc}")
        return 2

    output = Path(args.output)
    print("Texforge - Procedural PBR Texture Synthesizer")
    print("=" * 40)
    print(f"Resolution: {generator.resolution}x{generator.resolution}")

    if args.material:
        loader = MaterialLoader()
        try:
            material = loader.load(args.material)
        except (FileNotFoundError, ValueError) as exc:
            print(f"error: {exc}")
            return 2
        jobs = [(material.name, lambda: material.get_texture_set(generator))]
        print(f"Material {material.name}: recipe {material.recipe}, repeat {material.repeat}")
    else:
        names = list(RECIPES) if args.recipe == "all" else [args.recipe]
        jobs = [(name, lambda name=name: generator.generate(name)) for name in names]

    for name, job in jobs:
        started = time.perf_counter()
        texture_set = job()
        paths = texture_set.save(output, name)
        elapsed = time.perf_counter() - started
        print(f"- {name} ({', '.join(texture_set.maps())}) in {elapsed:.2f}s")
        for path in paths:
            print(f"    {path}")

    return 0


if __name__ == "__main__":
    raise SystemExit(main())
