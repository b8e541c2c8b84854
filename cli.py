#!/usr/bin/env python3
"""
Main CLI for the Gold Savings analysis workbench.
Usage: python cli.py analyze [PRICES_XML] [options]
"""

import sys
import json
import argparse
from pathlib import Path
from typing import Any, Dict

# Add project root to path
project_root = Path(__file__).parent
sys.path.insert(0, str(project_root))

from analysis.config import ConfigError, load_analysis_config
from analysis.metrics_aggregator import MetricsAggregatorError, compose_analysis
from storage.price_store import PriceStoreError, load_prices_xml, save_prices_xml


def main(argv=None):
    """Main CLI entry point."""
    parser = argparse.ArgumentParser(
        description='Analyze a gold price series stored as XML',
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  python cli.py analyze ./data/gold_prices.xml
  python cli.py analyze --current-year 2024 --json
  python cli.py analyze prices.xml --export copy.xml
        """
    )
    subparsers = parser.add_subparsers(dest='command', required=True)

    analyze = subparsers.add_parser('analyze', help='Run all price queries')
    analyze.add_argument('path', nargs='?',
                         help='Price XML file (default: prices_path from config)')
    analyze.add_argument('--config',
                         help='YAML config file (default: ./config/analysis.yml)')
    analyze.add_argument('--current-year', type=int,
                         help='Year for top 3 highest/lowest prices (default: this year)')
    analyze.add_argument('--json', action='store_true',
                         help='Print the summary as JSON')
    analyze.add_argument('--export',
                         help='Save the loaded series to this XML path and reload it')

    args = parser.parse_args(argv)

    if args.command == 'analyze':
        sys.exit(run_analyze(args))


def run_analyze(args) -> int:
    """
    Load prices, compose the analysis and print it.

    Returns:
        Process exit code
    """
    try:
        config = load_analysis_config(args.config)
    except ConfigError as e:
        print(f"ERROR: {e}", file=sys.stderr)
        return 1

    if args.current_year is not None:
        config.current_year = args.current_year

    prices_path = Path(args.path) if args.path else config.prices_path

    try:
        prices = load_prices_xml(prices_path)
    except PriceStoreError as e:
        print(f"ERROR: Could not load prices: {e}", file=sys.stderr)
        return 1

    if not prices:
        print(f"No data found in {prices_path}. Exiting.")
        return 1

    try:
        summary = compose_analysis(prices, config)
    except MetricsAggregatorError as e:
        print(f"ERROR: Analysis failed: {e}", file=sys.stderr)
        return 1

    if args.json:
        print(json.dumps(summary, indent=2, default=str))
    else:
        print(f"Retrieved {len(prices)} records. Ready for analysis.")
        print_summary(summary)

    if args.export:
        try:
            save_prices_xml(prices, args.export)
            reloaded = load_prices_xml(args.export)
        except PriceStoreError as e:
            print(f"ERROR: Export failed: {e}", file=sys.stderr)
            return 1
        print(f"Gold prices saved to XML: {args.export}")
        print(f"Loaded {len(reloaded)} gold prices from XML.")

    return 0


def print_summary(summary: Dict[str, Any]) -> None:
    """Print the summary in console sections."""
    print()
    print(f"Average Gold Price: {summary['average_price']:.2f}")

    top3 = summary['top3']
    print(f"\nTop 3 Highest Prices ({top3['year']}):")
    for rec in top3['highest']:
        print(f"{rec['date']}: {rec['price']}")

    print(f"\nTop 3 Lowest Prices ({top3['year']}):")
    for rec in top3['lowest']:
        print(f"{rec['date']}: {rec['price']}")

    profitable = summary['profitable_days']
    print(f"\nProfitable Days (More than {profitable['threshold_pct']:g}% Gain):")
    if profitable['days'] is None:
        print(f"Could not compute: {summary['errors'].get('profitable_days')}")
    else:
        for day in profitable['days']:
            print(f"{day['date']}: {day['return_pct']:.2f}%")

    decile = summary['second_decile']
    print("\nSecond Ten Prices Dates:")
    if decile['status'] == 'insufficient_data':
        print("No sufficient data found to determine the second ten prices ranking.")
    else:
        for d in decile['dates']:
            print(d)

    print("\nYearly Averages:")
    for year, value in summary['yearly_averages'].items():
        print(f"{year}: {value:.2f}")

    best = summary['best_investment']
    if best is not None:
        print("\nBest Investment Opportunity:")
        print(
            f"Buy on {best['buy_date']} and sell on {best['sell_date']} "
            f"with a return of {best['return_pct']:.2f}%"
        )
    elif 'best_investment' in summary['errors']:
        print(f"\nBest Investment Opportunity: could not compute: {summary['errors']['best_investment']}")
    else:
        print("\nNo investment opportunity found.")

    for warning in summary['metadata']['warnings']:
        print(f"WARNING: {warning}")

    print("\nGold analysis completed.")


if __name__ == '__main__':
    main()
