from pathlib import Path

ROOT = Path(__file__).resolve().parents[3]

OUTPUT_ROOT = ROOT / "output"

# ----- Lattice exports -----
TREE_EXPORTS_ROOT = OUTPUT_ROOT / "binomial_tree"
