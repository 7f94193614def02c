"""
Command-line interface for streaming ROC evaluation.
"""
from __future__ import annotations
import argparse, json, math, os, sys, logging
import pandas as pd

from streamroc.config import EvaluationConfig, load_config
from streamroc.data.synthetic_generator import generate_dataset, save_csv
from streamroc.evaluation.errors import StreamROCError
from streamroc.evaluation.metrics import exact_auc, summarize_roc
from streamroc.evaluation.roc import ROCMultiClass, load_evaluator, save_evaluator
from streamroc.validation import (
    validate_generate_params, validate_evaluation_config, validate_class_columns
)
from streamroc.visualization import plot_roc_curves

# Configure logging
logging.basicConfig(
    level=logging.INFO,
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s',
    datefmt='%Y-%m-%d %H:%M:%S'
)
logger = logging.getLogger(__name__)

def _ensure_dirs(path: str):
    d = os.path.dirname(path)
    if d and not os.path.exists(d):
        os.makedirs(d, exist_ok=True)
        logger.debug(f"Created directory: {d}")

def _write_report(report: dict, path: str):
    try:
        _ensure_dirs(path)
        with open(path, "w", encoding="utf-8") as f:
            json.dump(report, f, indent=2)
        logger.info(f"Report written to {path}")
    except PermissionError:
        logger.error(f"Permission denied when writing to {path}")
        sys.exit(1)
    except OSError as e:
        logger.error(f"Failed to write file {path}: {e}")
        sys.exit(1)

def _build_config(args) -> EvaluationConfig:
    cfg = load_config(args.config) if args.config else EvaluationConfig()
    if args.steps is not None:
        cfg.threshold_steps = args.steps
    if args.batch_size is not None:
        cfg.batch_size = args.batch_size
    if args.plot is not None:
        cfg.plot_path = args.plot
    validate_evaluation_config(cfg)
    return cfg

def cmd_generate(args):
    logger.info(f"Generating dataset: n={args.n}, classes={args.classes}, seed={args.seed}")
    try:
        validate_generate_params(args.n, args.classes, args.seed)
    except ValueError as e:
        logger.error(f"Validation error: {e}")
        sys.exit(1)

    df = generate_dataset(args.n, n_classes=args.classes, seed=args.seed, separation=args.separation)

    try:
        _ensure_dirs(args.out)
        save_csv(df, args.out)
        logger.info(f"Generated dataset written to {args.out} with {len(df)} rows")
    except PermissionError:
        logger.error(f"Permission denied when writing to {args.out}")
        sys.exit(1)
    except OSError as e:
        logger.error(f"Failed to write file {args.out}: {e}")
        sys.exit(1)

def cmd_evaluate(args):
    logger.info(f"Evaluating predictions from {args.inp}")

    try:
        cfg = _build_config(args)
        logger.info(f"Configuration: threshold_steps={cfg.threshold_steps}, batch_size={cfg.batch_size}")
    except FileNotFoundError:
        logger.error(f"Config file not found: {args.config}")
        sys.exit(1)
    except ValueError as e:
        logger.error(f"Configuration error: {e}")
        sys.exit(1)

    roc = ROCMultiClass(cfg.threshold_steps)
    exact_frames = []
    n_chunks = 0

    # Stream the file chunk by chunk; only counts are kept in memory
    try:
        for chunk in pd.read_csv(args.inp, chunksize=cfg.batch_size):
            label_cols, pred_cols = validate_class_columns(chunk, cfg.label_prefix, cfg.prediction_prefix)
            roc.eval(chunk[label_cols].to_numpy(dtype=float), chunk[pred_cols].to_numpy(dtype=float))
            if args.exact:
                exact_frames.append(chunk[label_cols + pred_cols])
            n_chunks += 1
    except FileNotFoundError:
        logger.error(f"Input file not found: {args.inp}")
        sys.exit(1)
    except pd.errors.EmptyDataError:
        logger.error(f"Input file is empty: {args.inp}")
        sys.exit(1)
    except pd.errors.ParserError as e:
        logger.error(f"Failed to parse CSV file {args.inp}: {e}")
        sys.exit(1)
    except (StreamROCError, ValueError) as e:
        logger.error(f"Validation error in chunk {n_chunks}: {e}")
        sys.exit(1)

    if not roc.is_fitted:
        logger.error(f"No rows found in {args.inp}")
        sys.exit(1)

    logger.info(f"Processed {roc.total_examples} rows in {n_chunks} chunks, {roc.num_classes} classes")

    report = summarize_roc(roc)
    if args.exact:
        full = pd.concat(exact_frames, ignore_index=True)
        n = roc.num_classes
        values = full.to_numpy(dtype=float)
        report["exact_auc"] = [None if math.isnan(v) else v for v in exact_auc(values[:, :n], values[:, n:])]

    if report["average_auc"] is not None:
        logger.info(f"Average AUC: {report['average_auc']:.4f}")
    else:
        logger.warning("Average AUC undefined: some class has no positive or no negative examples")

    if args.save_state:
        save_evaluator(roc, args.save_state)
        logger.info(f"Evaluator state saved to {args.save_state}")

    if cfg.plot_path:
        plot_roc_curves(roc, output_path=cfg.plot_path)
        logger.info(f"ROC plot written to {cfg.plot_path}")

    if args.out:
        _write_report(report, args.out)
    print(json.dumps(report, indent=2))

def cmd_merge(args):
    logger.info(f"Merging {len(args.states)} evaluator states")

    merged = None
    try:
        for path in args.states:
            state = load_evaluator(path)
            if merged is None:
                merged = ROCMultiClass(state.threshold_steps)
            merged.merge(state)
            logger.debug(f"Merged {path}: {state.total_examples} rows")
    except (FileNotFoundError, TypeError) as e:
        logger.error(f"Failed to load state: {e}")
        sys.exit(1)
    except (StreamROCError, ValueError) as e:
        logger.error(f"Cannot merge {path}: {e}")
        sys.exit(1)

    if not merged.is_fitted:
        logger.error("None of the states contain any evaluated data")
        sys.exit(1)

    report = summarize_roc(merged)
    logger.info(f"Merged {merged.total_examples} rows, average AUC: {report['average_auc']}")

    if args.save_state:
        save_evaluator(merged, args.save_state)
        logger.info(f"Merged state saved to {args.save_state}")

    if args.out:
        _write_report(report, args.out)
    print(json.dumps(report, indent=2))

def main(argv=None):
    parser = argparse.ArgumentParser(description="Streaming multi-class ROC / AUC evaluation")
    sub = parser.add_subparsers()

    p1 = sub.add_parser("generate", help="Generate synthetic labels and predictions")
    p1.add_argument("--n", type=int, default=1000)
    p1.add_argument("--classes", type=int, default=3)
    p1.add_argument("--seed", type=int, default=42)
    p1.add_argument("--separation", type=float, default=1.5)
    p1.add_argument("--out", type=str, default="data/predictions.csv")
    p1.set_defaults(func=cmd_generate)

    p2 = sub.add_parser("evaluate", help="Stream a CSV of labels/predictions into ROC counts")
    p2.add_argument("--inp", type=str, required=True)
    p2.add_argument("--config", type=str, default=None)
    p2.add_argument("--steps", type=int, default=None)
    p2.add_argument("--batch-size", type=int, default=None)
    p2.add_argument("--plot", type=str, default=None)
    p2.add_argument("--save-state", type=str, default=None)
    p2.add_argument("--exact", action="store_true", help="Also compute exact AUC (loads all rows)")
    p2.add_argument("--out", type=str, default=None)
    p2.set_defaults(func=cmd_evaluate)

    p3 = sub.add_parser("merge", help="Merge saved evaluator states")
    p3.add_argument("states", nargs="+")
    p3.add_argument("--save-state", type=str, default=None)
    p3.add_argument("--out", type=str, default=None)
    p3.set_defaults(func=cmd_merge)

    args = parser.parse_args(argv)
    if hasattr(args, "func"):
        args.func(args)
    else:
        parser.print_help()

if __name__ == "__main__":
    main()
