"""Find every line triple that separates seven random points into their own regions."""

import numpy as np

from planar_sandbox import PartitionSearch


def main() -> None:
    rng = np.random.default_rng(0)
    search = PartitionSearch(rng.uniform(-1.0, 1.0, size=(7, 2)))

    if search.collinear:
        print("Collinear points:", search.collinear_triples)
        return

    print(f"Qualifying lines: {len(search.qualifying)}")
    for classification in search.qualifying:
        print(f"  {classification.line}: split {classification.left}-{classification.right}")

    print(search.solution_summary())
    for _ in range(min(3, len(search.solutions))):
        triple = search.selected_solution
        print("  lines:", ", ".join(str(line) for line in triple.lines))
        print("  codes:", list(triple.codes), "missing:", list(triple.missing_codes))
        search.next_solution()


if __name__ == "__main__":
    main()
