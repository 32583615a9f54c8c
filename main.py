"""
RatingViews - Movie rating statistics batch job

CLI entry point for recomputing all derived views.
"""

import argparse
import logging
import sys

from src.models.pipeline_config import PipelineConfig
from src.orchestrator import PipelineOrchestrator
from src.storage.file_store import FileRecordStore
from src.storage.mongo_store import MongoRecordStore
import config.settings as settings


def setup_logging(log_level: str = "INFO"):
    """Configure logging for the entire application."""
    logging.basicConfig(
        level=getattr(logging, log_level.upper()),
        format=settings.LOG_FORMAT,
        handlers=[
            logging.StreamHandler(sys.stdout),
            logging.FileHandler(settings.LOG_FILE)
        ]
    )


def build_store(args):
    """Create the record store selected on the command line."""
    if args.backend == "file":
        return FileRecordStore(
            data_root=args.data_root,
            output_dir=args.output_dir,
            ratings_name=settings.RATINGS_COLLECTION,
            movies_name=settings.MOVIES_COLLECTION,
            rating_fields=settings.RATING_FIELD_MAP,
            movie_fields=settings.MOVIE_FIELD_MAP
        )

    return MongoRecordStore(
        uri=args.mongo_uri,
        database=args.database,
        ratings_collection=settings.RATINGS_COLLECTION,
        movies_collection=settings.MOVIES_COLLECTION,
        rating_fields=settings.RATING_FIELD_MAP,
        movie_fields=settings.MOVIE_FIELD_MAP,
        timeout_ms=settings.MONGO_TIMEOUT_MS
    )


def parse_args(argv=None):
    parser = argparse.ArgumentParser(
        description="RatingViews - recompute popularity, average and genre top-K views",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # Recompute views in the default MongoDB database
  python main.py --mongo-uri mongodb://localhost:27017/ --database movielens

  # Recompute from CSV files (ratings.csv, movies.csv) into JSON files
  python main.py --backend file --data-root data/ml-latest-small \\
                 --output-dir output

Note: MONGO_URI and MONGO_DATABASE environment variables set the defaults.
        """
    )

    parser.add_argument(
        "--backend",
        default=settings.STORE_BACKEND,
        choices=["mongo", "file"],
        help=f"Record store backend (default: {settings.STORE_BACKEND})"
    )

    parser.add_argument(
        "--mongo-uri",
        default=settings.MONGO_URI,
        help="MongoDB connection string"
    )

    parser.add_argument(
        "--database",
        default=settings.MONGO_DATABASE,
        help=f"MongoDB database name (default: {settings.MONGO_DATABASE})"
    )

    parser.add_argument(
        "--data-root",
        default=str(settings.DATA_ROOT),
        help=f"Directory with ratings.csv and movies.csv (default: {settings.DATA_ROOT})"
    )

    parser.add_argument(
        "--output-dir",
        default=str(settings.OUTPUT_ROOT),
        help=f"Directory for view JSON files (default: {settings.OUTPUT_ROOT})"
    )

    parser.add_argument(
        "--top-k",
        type=int,
        default=settings.TOP_K,
        help=f"Movies kept per genre ranking (default: {settings.TOP_K})"
    )

    parser.add_argument(
        "--log-level",
        default=settings.LOG_LEVEL,
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        help=f"Logging level (default: {settings.LOG_LEVEL})"
    )

    return parser.parse_args(argv)


def main(argv=None):
    """Main CLI entry point."""
    args = parse_args(argv)

    # Setup logging
    setup_logging(args.log_level)
    logger = logging.getLogger(__name__)

    # Print banner
    print("=" * 60)
    print("RatingViews - Movie Rating Statistics")
    print("=" * 60)
    print(f"Backend: {args.backend}")
    if args.backend == "mongo":
        print(f"Database: {args.database}")
    else:
        print(f"Data root: {args.data_root}")
        print(f"Output dir: {args.output_dir}")
    print(f"Top-K: {args.top_k}")
    print("=" * 60)
    print()

    store = None
    try:
        config = PipelineConfig.from_settings(top_k=args.top_k)

        logger.info("Initializing RatingViews pipeline...")
        store = build_store(args)
        orchestrator = PipelineOrchestrator(store=store, config=config)

        row_counts = orchestrator.run()

        # Success
        print()
        print("=" * 60)
        print("✅ Views recomputed successfully!")
        print("=" * 60)
        for view_name, count in row_counts.items():
            print(f"{view_name}: {count} rows")
        print("=" * 60)

        logger.info("RatingViews completed successfully")
        sys.exit(0)

    except KeyboardInterrupt:
        logger.warning("Pipeline interrupted by user")
        print("\n⚠️  Pipeline interrupted")
        sys.exit(1)

    except Exception as e:
        logger.error(f"Pipeline failed: {e}", exc_info=True)
        print(f"\n❌ Pipeline failed: {e}")
        print(f"Check {settings.LOG_FILE} for details")
        sys.exit(1)

    finally:
        if store is not None:
            store.close()


if __name__ == "__main__":
    main()
