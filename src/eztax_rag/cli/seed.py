import argparse
import logging
import sys
from pathlib import Path

from ..config import find_config_path, load_config
from ..pipelines import IngestionPipeline
from ..stores import JSONChunkStore

logger = logging.getLogger(__name__)


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(
        description="Build the vector store from the tax knowledge base"
    )
    parser.add_argument(
        "--config",
        type=Path,
        default=None,
        help="Path to configuration file (default: config.toml in project root)",
    )
    parser.add_argument(
        "--kb-dir",
        type=Path,
        default=None,
        help="Knowledge-base directory (overrides ingestion.directory)",
    )
    parser.add_argument(
        "--output",
        type=Path,
        default=None,
        help="Vector store file to write (overrides storage.path)",
    )

    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.INFO,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )

    try:
        config_path = find_config_path(args.config)
        config = load_config(config_path)
        store = JSONChunkStore(args.output) if args.output else None
        pipeline = IngestionPipeline.from_config(
            config, config_path, kb_dir=args.kb_dir, store=store
        )
    except (FileNotFoundError, ValueError) as e:
        print(f"Configuration error: {e}", file=sys.stderr)
        return 1

    try:
        results = pipeline.build()
    except Exception as e:
        logger.exception("Vector store build failed")
        print(f"Error: {e}", file=sys.stderr)
        return 1

    print("\n=== Vector Store Build Complete ===")
    print(f"Documents processed: {results['documents']}")
    print(f"Chunks created: {results['chunks']}")
    print(f"Embeddings generated: {results['embeddings']}")
    print(f"Store written to: {getattr(pipeline.store, 'path', '-')}")
    return 0


if __name__ == "__main__":
    sys.exit(main())
