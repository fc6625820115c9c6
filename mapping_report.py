"""
LED-Wall Mapping - Status Report
Tabular overview of a mapping document: zones, coverage and playlists.
"""

import argparse
import logging
from pathlib import Path
from typing import Optional

import pandas as pd

from mapping_pipeline.core.document import MappingCodec
from mapping_pipeline.models import Mapping

logger = logging.getLogger(__name__)

ZONE_COLUMNS = [
    "source", "zone",
    "src_x", "src_y", "src_w", "src_h",
    "dst_x", "dst_y", "dst_w", "dst_h",
]


def zones_frame(mapping: Mapping) -> pd.DataFrame:
    """One row per zone across all sources."""
    rows = []
    for si, source in enumerate(mapping.sources):
        for zi, zone in enumerate(source.zones):
            rows.append({
                "source": si,
                "zone": zi,
                "src_x": zone.src.x, "src_y": zone.src.y, "src_w": zone.src.w, "src_h": zone.src.h,
                "dst_x": zone.dst.x, "dst_y": zone.dst.y, "dst_w": zone.dst.w, "dst_h": zone.dst.h,
            })
    return pd.DataFrame(rows, columns=ZONE_COLUMNS)


def coverage_frame(mapping: Mapping) -> pd.DataFrame:
    """Per source: declared width, width covered by zones, and zone count."""
    zones = zones_frame(mapping)
    covered = zones.groupby("source")["src_w"].sum() if not zones.empty else pd.Series(dtype=float)
    counts = zones.groupby("source").size() if not zones.empty else pd.Series(dtype=int)

    df = pd.DataFrame({
        "source": range(len(mapping.sources)),
        "width": [s.size.w for s in mapping.sources],
        "height": [s.size.h for s in mapping.sources],
    })
    df["covered_width"] = df["source"].map(covered).fillna(0)
    df["zones"] = df["source"].map(counts).fillna(0).astype(int)
    df["fully_covered"] = df["covered_width"] >= df["width"]
    return df


def playlist_frame(mapping: Mapping, profile: Optional[str] = None) -> pd.DataFrame:
    """The playlist matrix: one row per slot, one column per source."""
    columns = {}
    for si, source in enumerate(mapping.sources):
        name = profile or mapping.playlist_profile()
        columns[f"source_{si}"] = pd.Series((source.playlists or {}).get(name, []), dtype=object)
    df = pd.DataFrame(columns)
    df.index.name = "slot"
    return df.fillna("")


def clip_counts_frame(mapping: Mapping, profile: Optional[str] = None) -> pd.DataFrame:
    """How often each clip is scheduled per source."""
    playlists = playlist_frame(mapping, profile)
    if playlists.empty:
        return pd.DataFrame(columns=["source", "clip", "count"])
    long = playlists.reset_index().melt(id_vars="slot", var_name="source", value_name="clip")
    long = long[long["clip"] != ""]
    return (
        long.groupby(["source", "clip"]).size()
        .reset_index(name="count")
        .sort_values(["source", "count"], ascending=[True, False])
        .reset_index(drop=True)
    )


def generate_report(mapping_path: Path, csv_dir: Optional[Path] = None, profile: Optional[str] = None) -> None:
    mapping = MappingCodec().load(mapping_path)

    print("=" * 60)
    print("      LED-WALL MAPPING - STATUS REPORT")
    print("=" * 60)
    print(f"🖥  Canvas:          {mapping.canvas.w}x{mapping.canvas.h} @ {mapping.fps or '-'} fps")
    print(f"🎞  Sources:         {len(mapping.sources)}")
    print(f"🗂  Profiles:        {', '.join(mapping.profile_names())} (active: {mapping.active_profile or '-'})")

    coverage = coverage_frame(mapping)
    uncovered = coverage[~coverage["fully_covered"]]
    print(f"🧩 Zones:           {int(coverage['zones'].sum())} total")
    if not uncovered.empty:
        print(f"⚠️  Not fully mapped: sources {uncovered['source'].tolist()}")

    print("-" * 60)
    print(coverage.to_string(index=False))
    print("-" * 60)
    playlists = playlist_frame(mapping, profile)
    print(playlists.to_string() if not playlists.empty else "No playlist entries.")
    print("=" * 60)

    if csv_dir is not None:
        csv_dir.mkdir(parents=True, exist_ok=True)
        zones_frame(mapping).to_csv(csv_dir / "zones.csv", index=False)
        coverage.to_csv(csv_dir / "coverage.csv", index=False)
        playlists.to_csv(csv_dir / "playlists.csv")
        clip_counts_frame(mapping, profile).to_csv(csv_dir / "clip_counts.csv", index=False)
        logger.info(f"Report tables written to {csv_dir}")


if __name__ == "__main__":
    parser = argparse.ArgumentParser(description="Mapping status report")
    parser.add_argument("mapping", type=Path, help="Path to a mapping JSON document")
    parser.add_argument("--csv-dir", type=Path, help="Also write the tables as CSV files here")
    parser.add_argument("--profile", type=str, help="Profile to show (default: the mapping's active profile)")
    args = parser.parse_args()
    generate_report(args.mapping, args.csv_dir, args.profile)
