#!/usr/bin/env python3
"""
hclust CLI - agglomerative clustering of distance maps and matrices
"""

import argparse
import json
import sys
from dataclasses import replace
from pathlib import Path

import numpy as np

from hclust.checker import MergeRecorder, checker_from_config
from hclust.cluster_set import ClusterSet, cluster_members
from hclust.config import (
    ConfigValidationError,
    HClustConfig,
    LinkageName,
    configure_logging,
    ensure_valid,
    load_config,
    validate_config,
)
from hclust.distance_map import DistanceMapClusterSet
from hclust.engine import HClustering
from hclust.linkage import get_linkage
from hclust.matrix import MatrixClusterSet

MATRIX_SUFFIXES = {".npy", ".csv", ".txt"}


class HClustCLI:
    """Main CLI interface for hclust."""

    def __init__(self):
        self.parser = self._create_parser()

    def _create_parser(self) -> argparse.ArgumentParser:
        """Create the argument parser."""
        parser = argparse.ArgumentParser(
            prog="hclust", description="Agglomerative hierarchical clustering"
        )
        parser.add_argument(
            "--config-dir",
            default=".",
            help="Directory containing hclust.toml (default: current directory)",
        )
        parser.add_argument(
            "--log-level",
            choices=["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"],
            help="Override the configured log level",
        )

        subparsers = parser.add_subparsers(dest="command", help="Available commands")

        # Cluster command
        cluster_parser = subparsers.add_parser(
            "cluster", help="Cluster a distance map (.json) or matrix (.npy/.csv/.txt)"
        )
        cluster_parser.add_argument("path", help="Input file")
        cluster_parser.add_argument(
            "-l",
            "--linkage",
            choices=[e.value for e in LinkageName],
            help="Linkage method",
        )
        cluster_parser.add_argument(
            "-t", "--threshold", type=float, help="Stop before merges scoring above this"
        )
        cluster_parser.add_argument(
            "-k", "--max-clusters", type=int, help="Stop once this many clusters remain"
        )
        cluster_parser.add_argument(
            "--trace", action="store_true", help="Log every merge decision"
        )
        cluster_parser.add_argument(
            "--history", action="store_true", help="Print the merge history"
        )
        cluster_parser.add_argument(
            "--json", action="store_true", help="Output as JSON"
        )

        # Config command
        config_parser = subparsers.add_parser("config", help="Inspect configuration")
        config_subparsers = config_parser.add_subparsers(dest="config_command")
        show_parser = config_subparsers.add_parser(
            "show", help="Show effective configuration"
        )
        show_parser.add_argument("--json", action="store_true", help="Output as JSON")
        config_subparsers.add_parser("validate", help="Validate configuration")

        return parser

    def run(self, args=None) -> int:
        """Run the CLI."""
        args = self.parser.parse_args(args)

        if not args.command:
            self.parser.print_help()
            return 0

        try:
            config = load_config(project_path=Path(args.config_dir))
            if args.log_level:
                config.logging = replace(config.logging, level=args.log_level)

            if args.command == "cluster":
                return self._cmd_cluster(args, config)
            elif args.command == "config":
                return self._cmd_config(args, config)
            else:
                print(f"Error: Unknown command '{args.command}'", file=sys.stderr)
                return 1
        except Exception as e:
            print(f"Error: {e}", file=sys.stderr)
            return 1

    def _cmd_cluster(self, args, config: HClustConfig) -> int:
        """Cluster an input file and print the result."""
        overrides = {}
        if args.linkage:
            overrides["linkage"] = args.linkage
        if args.threshold is not None:
            overrides["threshold"] = args.threshold
        if args.max_clusters is not None:
            overrides["max_clusters"] = args.max_clusters
        if args.trace:
            overrides["trace_merges"] = True
        config.clustering = replace(config.clustering, **overrides)

        ensure_valid(config)
        configure_logging(config.logging)

        cluster_set = self._load_cluster_set(Path(args.path), config)
        recorder = MergeRecorder(checker_from_config(config.clustering))
        engine = HClustering(
            cluster_set, recorder, get_linkage(config.clustering.linkage)
        )
        engine.run()

        clusters = cluster_members(cluster_set)
        if args.json:
            result = {
                "linkage": config.clustering.linkage,
                "merges": engine.merges,
                "clusters": clusters,
            }
            if args.history:
                result["history"] = [
                    {"step": s.step, "i": s.i, "j": s.j, "score": s.score}
                    for s in recorder.steps
                ]
            print(json.dumps(result, indent=2, default=str))
            return 0

        if args.history:
            for s in recorder.steps:
                print(f"step {s.step}: merge ({s.i},{s.j}) ~~ {s.score:.6f}")
            print()

        print(f"{len(clusters)} clusters after {engine.merges} merges")
        for idx, members in enumerate(clusters):
            print(f"  {idx}: {' '.join(str(m) for m in members)}")
        return 0

    def _load_cluster_set(self, path: Path, config: HClustConfig) -> ClusterSet:
        """Load a distance map or a distance matrix from ``path``."""
        if not path.exists():
            raise FileNotFoundError(f"No such file: {path}")

        suffix = path.suffix.lower()
        if suffix == ".json":
            with open(path) as f:
                data = json.load(f)
            if not isinstance(data, dict) or not all(
                isinstance(row, dict) for row in data.values()
            ):
                raise ValueError(
                    f"{path} must contain an object mapping items to objects of distances"
                )
            return DistanceMapClusterSet(
                data, default_distance=config.clustering.default_distance
            )

        if suffix in MATRIX_SUFFIXES:
            if suffix == ".npy":
                matrix = np.load(path)
            else:
                delimiter = "," if suffix == ".csv" else None
                matrix = np.loadtxt(path, delimiter=delimiter, ndmin=2)
            return MatrixClusterSet(matrix)

        raise ValueError(
            f"Unsupported input format '{suffix}', expected .json, .npy, .csv or .txt"
        )

    def _cmd_config(self, args, config: HClustConfig) -> int:
        """Inspect configuration."""
        if not args.config_command or args.config_command == "show":
            if getattr(args, "json", False):
                print(json.dumps(config.to_dict(), indent=2))
                return 0

            for section, values in config.to_dict().items():
                print(f"[{section}]")
                for key, value in values.items():
                    print(f"  {key} = {value}")
            return 0

        elif args.config_command == "validate":
            result = validate_config(config)
            for warning in result.warnings:
                print(f"Warning: {warning}")
            if not result:
                print(
                    str(
                        ConfigValidationError(
                            "Configuration is invalid", result.errors
                        )
                    ),
                    file=sys.stderr,
                )
                return 1
            print("Configuration is valid")
            return 0

        return 1


def main():
    """Main entry point."""
    cli = HClustCLI()
    sys.exit(cli.run())


if __name__ == "__main__":
    main()
