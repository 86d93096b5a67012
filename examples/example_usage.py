import sys
import os
# Add the project root to Python path
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from expression_search import TargetSolver, LogLevel


def parse_digits(text):
  """Split a digit string such as '1234' into [1, 2, 3, 4]"""
  if not text.isdigit():
    raise ValueError(f"Expected only digits, got {text!r}")
  return [int(ch) for ch in text]


def main():
  digits = sys.argv[1] if len(sys.argv) > 1 else "1234"
  target = int(sys.argv[2]) if len(sys.argv) > 2 else 10

  numbers = parse_digits(digits)
  print(f"Numbers: {numbers}")
  print(f"Target: {target}")

  solver = TargetSolver(target=target, verify_results=True, log_level=LogLevel.MODERATE)
  expressions = solver.solve_expressions(numbers)

  if not expressions:
    print("No solution")
    return

  print(f"\nFound {len(expressions)} distinct solution(s):")
  for i, expr in enumerate(expressions):
    print(f"  {i+1:3d}. {expr.to_string():<30} complexity={expr.complexity()}")

  print("\nSearch statistics:")
  for key, value in solver.last_stats.items():
    print(f"  {key}: {value}")


if __name__ == "__main__":
  main()
