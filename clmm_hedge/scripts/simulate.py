#!/usr/bin/env python
"""
Simulate a hypothetical CLMM position and print its token split and hedge.

Usage:
  python -m clmm_hedge.scripts.simulate --pair SOL/USDC --low 120 --high 180 \
      --amount 1000 --entry-token USDC --price 150
  python -m clmm_hedge.scripts.simulate --pair SOL/USDC --low 120 --high 180 \
      --amount 1000 --entry-token USDC --price 150 --profile 100 200
"""
import argparse
import json
import sys

from clmm_hedge.data.registry import PoolRegistry
from clmm_hedge.engine import HedgeEngine, SimulationRequest
from clmm_hedge.errors import EngineError
from clmm_hedge.math.curve_math import validate_price


def main(argv=None) -> int:
    parser = argparse.ArgumentParser(description='Simulate a concentrated liquidity position and its hedge')
    parser.add_argument('--pair', type=str, required=True, help='Pair id (e.g., SOL/USDC)')
    parser.add_argument('--low', type=str, required=True, help='Range lower price (token B per token A)')
    parser.add_argument('--high', type=str, required=True, help='Range upper price (token B per token A)')
    parser.add_argument('--amount', type=str, required=True, help='Deposit amount in entry token units')
    parser.add_argument('--entry-token', type=str, required=True, help='Entry token symbol (or A/B)')
    parser.add_argument('--price', type=float, required=True, help='Current price')
    parser.add_argument('--entry-price', type=str, default=None, help='Entry price (defaults to current price)')
    parser.add_argument('--snap', action='store_true', help='Snap range to initializable ticks')
    parser.add_argument('--pools', type=str, default=None, help='YAML pool registry (defaults to built-in pairs)')
    parser.add_argument('--profile', type=float, nargs=2, metavar=('PRICE_LOW', 'PRICE_HIGH'),
                        help='Also print the exposure profile over this price window')
    parser.add_argument('--points', type=int, default=11, help='Profile grid points')

    args = parser.parse_args(argv)

    registry = PoolRegistry.from_yaml(args.pools) if args.pools else PoolRegistry.default()
    engine = HedgeEngine(registry)

    try:
        request = SimulationRequest.parse({
            'pair': args.pair,
            'rangeLow': args.low,
            'rangeHigh': args.high,
            'amount': args.amount,
            'entryToken': args.entry_token,
            'entryPrice': args.entry_price,
            'snapToTicks': args.snap,
        })
        validate_price(args.price)
    except EngineError as e:
        print(f"Invalid input: {e}", file=sys.stderr)
        return 2

    outcome = engine.run_simulation(request, args.price)
    if not outcome.ok:
        print(f"Simulation failed ({type(outcome.error).__name__}): {outcome.error}", file=sys.stderr)
        return 1

    report = outcome.report.to_dict()
    print(json.dumps(report, indent=2))

    side = report['hedge_side']
    if side == 'flat':
        print(f"\nHedge: flat (no {report['token_a']} exposure)")
    else:
        print(f"\nHedge: {side} {report['hedge_notional']} {report['token_a']} "
              f"(~{report['hedge_notional_value']} {report['token_b']})")

    if args.profile:
        try:
            profile = engine.simulation_profile(request, args.price, args.profile[0], args.profile[1], args.points)
        except EngineError as e:
            print(f"Profile failed: {e}", file=sys.stderr)
            return 1

        print(f"\n{'price':>14} {'amount_a':>16} {'amount_b':>16} {'value':>16}")
        for i in range(len(profile['price'])):
            print(f"{profile['price'][i]:>14.4f} {profile['amount_a'][i]:>16.6f} "
                  f"{profile['amount_b'][i]:>16.4f} {profile['value'][i]:>16.4f}")

    return 0


if __name__ == "__main__":
    sys.exit(main())
