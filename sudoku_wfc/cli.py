"""Command-line interface for the wave function collapse Sudoku solver."""

import argparse
import sys

from .core.board import Board
from .core.loader import load_board
from .app.ticker import DEFAULT_INTERVAL


def main():
    """Main entry point for the CLI."""
    parser = argparse.ArgumentParser(
        description="Sudoku solver using the wave function collapse algorithm",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # Fill a board by hand and watch it get solved
  sudoku-wfc play

  # Start from a board file
  sudoku-wfc play -f board.txt

  # Solve without the terminal UI
  sudoku-wfc solve --puzzle "530070000600195000..." --verbose

  # Record the search and chart it
  sudoku-wfc trace -f board.txt --seed 7 --output results/
        """
    )
    
    subparsers = parser.add_subparsers(dest="command", help="Available commands")
    
    # Play command
    play_parser = subparsers.add_parser("play", help="Interactive terminal board")
    play_parser.add_argument(
        "--file", "-f", type=str, default=None,
        help="Optional path to file of initial values"
    )
    play_parser.add_argument(
        "--interval", "-i", type=float, default=DEFAULT_INTERVAL,
        help=f"Seconds between solver steps (default: {DEFAULT_INTERVAL})"
    )
    play_parser.add_argument(
        "--seed", "-s", type=int, default=None,
        help="Random seed for reproducibility"
    )
    
    # Solve command
    solve_parser = subparsers.add_parser("solve", help="Solve a board without the UI")
    _add_board_source(solve_parser)
    solve_parser.add_argument(
        "--seed", "-s", type=int, default=None,
        help="Random seed for reproducibility"
    )
    solve_parser.add_argument(
        "--verbose", "-v", action="store_true",
        help="Show detailed solving statistics"
    )
    
    # Trace command
    trace_parser = subparsers.add_parser("trace", help="Record and chart a search")
    _add_board_source(trace_parser)
    trace_parser.add_argument(
        "--seed", "-s", type=int, default=None,
        help="Random seed for reproducibility"
    )
    trace_parser.add_argument(
        "--max-steps", type=int, default=None,
        help="Stop recording after this many steps"
    )
    trace_parser.add_argument(
        "--output", "-o", type=str, default="results",
        help="Output directory for trace files (default: results)"
    )
    trace_parser.add_argument(
        "--no-charts", action="store_true",
        help="Skip chart generation"
    )
    
    args = parser.parse_args()
    
    if args.command is None:
        parser.print_help()
        sys.exit(1)
    
    if args.command == "play":
        cmd_play(args)
    elif args.command == "solve":
        cmd_solve(args)
    elif args.command == "trace":
        cmd_trace(args)


def _add_board_source(subparser):
    source = subparser.add_mutually_exclusive_group(required=True)
    source.add_argument(
        "--file", "-f", type=str,
        help="Path to a board file (9 lines, digits and spaces)"
    )
    source.add_argument(
        "--puzzle", "-p", type=str,
        help="Puzzle string (81 chars, 0 or . for empty cells)"
    )


def _read_board(args) -> Board:
    """Load the board named by --file/--puzzle, exiting on errors."""
    try:
        if getattr(args, "puzzle", None):
            return Board.from_string(args.puzzle)
        if args.file:
            return load_board(args.file)
    except ValueError as e:
        print(f"Error loading board: {e}")
        sys.exit(1)
    return Board()


def cmd_play(args):
    """Handle the play command."""
    from .app.ui import run_app
    
    board = _read_board(args)
    run_app(board, interval=args.interval, seed=args.seed)


def cmd_solve(args):
    """Handle the solve command."""
    from .solvers import WFCSolver
    
    board = _read_board(args)
    
    print("Input board:")
    print(board)
    print()
    
    if not board.can_solve():
        print("✗ Can't start solving. Board is invalid")
        sys.exit(1)
    
    solver = WFCSolver(seed=args.seed)
    print(f"Solving with {solver.name}...")
    solution, stats = solver.solve(board)
    
    if stats.solved:
        print(f"✓ Solved in {stats.time_seconds:.4f}s")
    else:
        print("✗ No solution!")
    
    if args.verbose:
        print(f"  Steps: {stats.iterations:,}")
        print(f"  Collapses: {stats.nodes_explored:,}")
        print(f"  Backtracks: {stats.backtracks:,}")
        print(f"  Max depth: {stats.max_depth}")
        print(f"  Memory: {stats.memory_bytes / 1024:.2f} KB")
        if "error" in stats.extra:
            print(f"  Error: {stats.extra['error']}")
    
    if solution is not None:
        print(solution)
    else:
        sys.exit(2)


def cmd_trace(args):
    """Handle the trace command."""
    from .analysis import SearchTrace
    
    board = _read_board(args)
    
    try:
        trace = SearchTrace(board, seed=args.seed, max_steps=args.max_steps)
    except ValueError as e:
        print(f"Error: {e}")
        sys.exit(1)
    
    print("=" * 60)
    print("WFC SEARCH TRACE")
    print("=" * 60)
    print(f"Seed: {args.seed}")
    print(f"Output directory: {args.output}")
    print("=" * 60)
    
    steps = trace.run()
    summary = trace.get_summary()
    
    print(f"\nOutcome: {summary['outcome']}")
    print(f"  Steps: {summary['steps']:,}")
    print(f"  Collapses: {summary['pushes']:,}")
    print(f"  Backtracks: {summary['pops']:,}")
    print(f"  Max depth: {summary['max_depth']}")
    if trace.solution is not None:
        print(trace.solution)
    
    for path in trace.save_results(args.output):
        print(f"Saved {path}")
    
    if not args.no_charts and steps:
        from .analysis.visualizer import TraceVisualizer
        
        print("\nGenerating charts...")
        visualizer = TraceVisualizer(steps, args.output)
        for chart in visualizer.generate_all():
            print(f"  - {chart}")
    
    print("\n" + "=" * 60)
    print("Trace complete!")


if __name__ == "__main__":
    main()
