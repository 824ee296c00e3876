#!/usr/bin/env python
import argparse
import logging
import sys
from typing import Any, Dict, Optional
import numpy as np

from core.exceptions import MathVizError
from evaluation.roots import find_roots
from evaluation.sampler import sample_with_report
from evaluation.surface import build_surface
from evaluation.tangent import tangent_at
from inout.sample_parser import ChartDataStore
from inout.yaml_parser import angle_mode_from_config, domain_from_config, parse_job_config
from numtheory.primes import generate_primes
from stats.descriptive import descriptive_stats, histogram, parse_sample
from stats.distributions import normal_curve
from symbolic.differentiator import derive
from symbolic.sympy_bridge import simplified_text
from utils.logging_config import setup_logging, get_logger

logger = get_logger(__name__)


def run_plot(section: Dict[str, Any], mode, arrays: Dict[str, np.ndarray]) -> None:
    expr = section['expression']
    domain = domain_from_config(section)
    result = sample_with_report(expr, domain, section['bindings'], mode)
    arrays['plot_x'], arrays['plot_y'] = result.xs(), result.ys()
    print(f"Plot '{expr}': {result.stats['kept']} of {result.stats['points']} points")
    if result.errors:
        logger.warning("%d point(s) dropped while sampling '%s'", len(result.errors), expr)

    if section['derivative']:
        derivative = derive(expr, 'x')
        print(f"d/dx {expr} = {simplified_text(derivative)}")

    if section['roots']:
        roots = find_roots(result.points)
        arrays['roots'] = np.asarray(roots, dtype=float)
        print("Roots: " + (", ".join(f"{r:.6g}" for r in roots) if roots else "none"))

    if section['tangent_x'] is not None:
        line, info = tangent_at(expr, section['tangent_x'], domain, mode)
        if info is None:
            print(f"Tangent at x={section['tangent_x']}: unavailable")
        else:
            arrays['tangent_y'] = np.asarray([p.y for p in line], dtype=float)
            print(f"Tangent at x={info.x0:.6g}: y0={info.y0:.6g}, slope={info.slope:.6g}")


def run_surface(section: Dict[str, Any], mode, arrays: Dict[str, np.ndarray]) -> None:
    mesh = build_surface(section['expression'], domain_from_config(section), mode)
    arrays['surface_vertices'] = mesh.vertices
    arrays['surface_indices'] = mesh.indices
    arrays['surface_normals'] = mesh.normals
    print(f"Surface '{section['expression']}': {mesh.vertex_count} vertices, {mesh.index_count} indices")


def run_statistics(section: Dict[str, Any], arrays: Dict[str, np.ndarray]) -> None:
    if section['sample'] is not None:
        values = parse_sample(section['sample'])
        stats = descriptive_stats(values)
        if stats is None:
            print("Descriptive statistics: no valid values")
        else:
            print(f"Mean {stats.mean:.2f}, median {stats.median:.2f}, variance {stats.variance:.2f}, "
                  f"std dev {stats.std_dev:.2f}, min {stats.min:.2f}, max {stats.max:.2f}, "
                  f"q1 {stats.q1:.2f}, q3 {stats.q3:.2f}")
        for b in histogram(values, section['bins']):
            print(f"  {b.range_label}: {b.count}")

    if section['scatter'] is not None:
        store = ChartDataStore()
        store.process('scatter', section['scatter'])
        line = store.regression()
        print(f"Regression: y = {line.slope:.6g} x + {line.intercept:.6g}")

    if section['normal'] is not None:
        normal = section['normal']
        curve = normal_curve(normal['mean'], normal['std_dev'], normal['sample_size'])
        arrays['normal_curve'] = np.asarray(curve, dtype=float)
        print(f"Normal curve: {len(curve)} points")


def main(argv: Optional[list] = None) -> int:
    """
    Run a batch of engine requests described by a YAML job file.

    Command-line arguments:
      --job: Path to the YAML job file.
      --dump: Optional path to dump numeric results (e.g., results.npz).
      --summary: Print a one-line summary at the end.
      --verbose: Enable DEBUG logging.
    """
    parser = argparse.ArgumentParser(description="Plot, differentiate, mesh and summarise expressions and samples.")
    parser.add_argument("--job", required=True, help="Path to the YAML job file.")
    parser.add_argument("--dump", help="Path to dump numeric results (e.g., results.npz)", default=None)
    parser.add_argument("--summary", action="store_true", help="Print job summary.")
    parser.add_argument("--verbose", action="store_true", help="Enable DEBUG logging.")
    args = parser.parse_args(argv)

    setup_logging(level=logging.DEBUG if args.verbose else logging.INFO)

    arrays: Dict[str, np.ndarray] = {}
    try:
        job = parse_job_config(args.job)
        mode = angle_mode_from_config(job)
        if 'plot' in job:
            run_plot(job['plot'], mode, arrays)
        if 'surface' in job:
            run_surface(job['surface'], mode, arrays)
        if 'statistics' in job:
            run_statistics(job['statistics'], arrays)
        if 'primes' in job:
            primes = generate_primes(job['primes'])
            arrays['primes'] = np.asarray(primes, dtype=np.int64)
            print(f"Primes <= {job['primes']}: {primes}")
    except (MathVizError, OSError) as e:
        logger.error("Job failed: %s", e)
        return 1

    logger.info("Job completed.")
    if args.summary:
        print(f"Job completed: {len(arrays)} result array(s)")
    if args.dump:
        np.savez(args.dump, **arrays)
        print(f"Results dumped to {args.dump}")
    return 0


if __name__ == "__main__":
    sys.exit(main())
