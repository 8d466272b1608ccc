"""
Offline field report — runs the heuristic engine on specimen photos, no network.

Usage:
  python field_report.py specimen.jpg                 # prints report to terminal
  python field_report.py specimen.jpg -o report.txt   # saves report
  python field_report.py photos/ -o reports/          # batch process folder
  python field_report.py specimen.jpg --features      # also print the feature vector
"""

import argparse
import os
import sys
from pathlib import Path

# Add backend to path
sys.path.insert(0, str(Path(__file__).parent))

from lithoscope.engine.archetypes import resolve_archetypes
from lithoscope.engine.errors import LithoscopeError
from lithoscope.engine.pipeline import create_pipeline
from lithoscope.engine.sampler import EncodedImageSource

IMAGE_EXTS = {".jpg", ".jpeg", ".png", ".webp", ".bmp", ".tif", ".tiff"}


def process_file(pipeline, input_path, output_path=None, show_features=False):
    try:
        ctx = pipeline.analyze(EncodedImageSource(Path(input_path).read_bytes()))
    except (OSError, LithoscopeError) as e:
        print(f"  ERROR: {e}")
        return False

    m = ctx.match
    print(f"  {m.archetype.name} — {m.confidence}% (distance {m.distance:.3f})")

    if show_features:
        f = ctx.features
        print(f"  luminance={f.avg_luminance:.1f} texture={f.texture_score:.1f} "
              f"edges={f.normalized_edge_density:.4f} biomorphic={f.biomorphic_index:.2f} "
              f"bias={f.color_bias.value}")

    if output_path:
        with open(output_path, "w", encoding="utf-8") as fh:
            fh.write(ctx.report + "\n")
        print(f"  → Saved: {output_path}")
    else:
        print()
        print(ctx.report)
    return True


def main():
    parser = argparse.ArgumentParser(description="Offline heuristic field report")
    parser.add_argument("input", help="Image file or folder of images")
    parser.add_argument("-o", "--output", help="Output file or folder")
    parser.add_argument("-t", "--table", help="Archetype table JSON (default: built-in)")
    parser.add_argument("-f", "--features", action="store_true", help="Print the feature vector")
    args = parser.parse_args()

    try:
        pipeline = create_pipeline(archetypes=resolve_archetypes(args.table))
    except LithoscopeError as e:
        print(f"Configuration error: {e}")
        sys.exit(2)

    if os.path.isdir(args.input):
        images = sorted(p for p in Path(args.input).iterdir() if p.suffix.lower() in IMAGE_EXTS)
        if not images:
            print("No image files found in folder.")
            sys.exit(1)
        out_dir = Path(args.output) if args.output else None
        if out_dir:
            out_dir.mkdir(parents=True, exist_ok=True)
        print(f"Processing {len(images)} files...\n")
        success = 0
        for path in images:
            print(f"[{path.name}]")
            out = out_dir / f"{path.stem}.txt" if out_dir else None
            success += process_file(pipeline, path, out, args.features)
            print()
        print(f"Done: {success}/{len(images)} processed")
    else:
        if not os.path.isfile(args.input):
            print(f"File not found: {args.input}")
            sys.exit(1)
        print(f"[{os.path.basename(args.input)}]")
        if not process_file(pipeline, args.input, args.output, args.features):
            sys.exit(1)


if __name__ == "__main__":
    main()
