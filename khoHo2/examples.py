"""
Examples demonstrating khoHo2 usage.

Run with: python -m khoHo2.examples
"""

from khoHo2.catalog import get_diagram
from khoHo2.config import HomologyType, KhovanovConfig
from khoHo2.conjecture import homological_width
from khoHo2.invariants import compute_jones_polynomial, linking_factor
from khoHo2.store import KhovanovStore


def example_trefoil():
    """Standard Khovanov homology of the right-handed trefoil."""
    print("=" * 60)
    print("Example 1: Right-handed trefoil")
    print("=" * 60)

    store = KhovanovStore()
    slot = store.initialize_diagram(get_diagram("3_1"), "3_1")
    rational, torsion = store.compute_polynomial(slot, split=True)

    print(f"Rational: {rational}")
    print(f"Torsion:  {torsion}")
    print(store.render_table(slot))
    print()


def example_theories():
    """The same knot in all four theories."""
    print("=" * 60)
    print("Example 2: Figure-eight knot in every theory")
    print("=" * 60)

    store = KhovanovStore()
    slot = store.initialize_diagram(get_diagram("4_1"), "4_1")
    for htype in HomologyType:
        print(f"{htype.value:>10}: {store.compute_polynomial(slot, htype)}")
    print()


def example_conjecture():
    """Extended Lee / Bar-Natan conjecture on knots and links."""
    print("=" * 60)
    print("Example 3: Conjecture checks")
    print("=" * 60)

    store = KhovanovStore()
    for name in ("3_1", "4_1", "5_1", "hopf_positive"):
        diagram = get_diagram(name)
        slot = store.initialize_diagram(diagram, name)
        result = store.check_conjecture(slot)
        width = homological_width(store.compute_polynomial(slot, split=True)[0])
        print(f"{name:>14}: {result}  width={width}  F={linking_factor(diagram)}")
    print()


def example_euler_characteristic():
    """Graded Euler characteristic against the Jones polynomial."""
    print("=" * 60)
    print("Example 4: Euler characteristic")
    print("=" * 60)

    store = KhovanovStore(KhovanovConfig(homology_type=HomologyType.REDUCED))
    slot = store.initialize_diagram(get_diagram("5_1"), "5_1")
    chi = store.compute_betti(slot).euler_characteristic()
    jones = compute_jones_polynomial(store.get_record(slot).diagram)
    print(f"Euler characteristic: {chi}")
    print(f"Jones polynomial:     {jones}")
    print(f"Match: {chi == jones}")
    print()


def example_torus_knot():
    """T(3,4): even and odd reduced homology differ."""
    print("=" * 60)
    print("Example 5: Torus knot T(3,4)")
    print("=" * 60)

    store = KhovanovStore()
    slot = store.initialize_diagram(get_diagram("8_19"), "8_19")
    for htype in (HomologyType.REDUCED, HomologyType.REDUCED_ODD):
        print(f"{htype.value:>10}: {store.compute_polynomial(slot, htype)}")
        print(f"{'':>10}  {store.summary(slot, htype)}")
    print(f"Conjecture: {store.check_conjecture(slot)}")
    print()


def example_verbose():
    """Progress reporting."""
    print("=" * 60)
    print("Example 6: Verbose run with the debug check")
    print("=" * 60)

    store = KhovanovStore(KhovanovConfig(homology_type="reducedOdd", verbose=2, debug=True))
    slot = store.initialize_diagram(get_diagram("4_1"), "4_1")
    store.compute_betti(slot)
    print()


def main():
    """Run all examples."""
    example_trefoil()
    example_theories()
    example_conjecture()
    example_euler_characteristic()
    example_torus_knot()
    example_verbose()


if __name__ == "__main__":
    main()
