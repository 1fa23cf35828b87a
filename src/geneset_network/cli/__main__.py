"""CLI entry point: python -m geneset_network.cli run"""

import argparse
import sys
from pathlib import Path

import structlog

from geneset_network.config.settings import get_settings
from geneset_network.errors import NetworkError
from geneset_network.export.service import write_result
from geneset_network.ingestion.json_loader import compute_file_hash, load_enrichment_file
from geneset_network.labeling.stopwords import load_stopwords
from geneset_network.logging_config import configure_logging, run_context
from geneset_network.network.config import NetworkConfig, load_network_config
from geneset_network.network.pipeline import run_network_pipeline
from geneset_network.reporting.summary import format_summary


def apply_stopwords_file(config: NetworkConfig, stopwords_path: Path | None) -> NetworkConfig:
    """Replace the labeling stopword sets with those from a YAML file."""
    if stopwords_path is None:
        return config
    domain, generic = load_stopwords(stopwords_path)
    labeling = config.labeling.model_copy(
        update={"domain_stopwords": domain, "generic_stopwords": generic}
    )
    return config.model_copy(update={"labeling": labeling})


def run_network(
    input_path: Path,
    config_path: Path,
    output_dir: Path,
    stopwords_path: Path | None = None,
) -> Path:
    """Load the input file, run the pipeline and write the result."""
    log = structlog.get_logger()

    config = apply_stopwords_file(load_network_config(config_path), stopwords_path)
    file_data = load_enrichment_file(input_path)
    input_hash = compute_file_hash(input_path)
    items = file_data.to_items()

    with run_context(input_path, config_path, input_hash):
        log.info("input_loaded", items=len(items))
        result = run_network_pipeline(items, config)
        path = write_result(result, output_dir, input_hash=input_hash)
        log.info("result_written", path=str(path), clusters=result.cluster_count)

    print(format_summary(result))
    return path


def main() -> None:
    parser = argparse.ArgumentParser(
        prog="geneset_network.cli",
        description="Gene Set Network CLI",
    )
    subparsers = parser.add_subparsers(dest="command")

    run_parser = subparsers.add_parser(
        "run", help="Build, prune, cluster and label a gene set network"
    )
    run_parser.add_argument("input", type=str, help="JSON enrichment result file")
    run_parser.add_argument(
        "--config",
        type=str,
        default=None,
        help="Network config YAML (default: ./config/network.yaml)",
    )
    run_parser.add_argument(
        "--output-dir",
        type=str,
        default=None,
        help="Output directory (default: ./network_output)",
    )

    args = parser.parse_args()

    if args.command is None:
        parser.print_help()
        sys.exit(1)

    if args.command == "run":
        settings = get_settings()
        configure_logging(json_output=settings.log_json, log_level=settings.log_level)

        config_path = Path(args.config) if args.config else settings.network_config_path
        output_dir = Path(args.output_dir) if args.output_dir else settings.output_dir

        try:
            run_network(Path(args.input), config_path, output_dir, settings.stopwords_path)
        except (NetworkError, OSError) as e:
            structlog.get_logger().error("network_run_failed", error=str(e))
            sys.exit(2)


if __name__ == "__main__":
    main()
