"""Basic usage example for spell-range."""

from pathlib import Path

from spell_range import SpellRange
from spell_range.core.types import EventKind
from spell_range.host import EventBus, load_snapshot, read_snapshot


SNAPSHOT_PATH = Path(__file__).with_name("snapshot.json")


def main():
    # Build a host from a snapshot of the player's spellbook
    host = load_snapshot(SNAPSHOT_PATH)
    bus = EventBus()
    spell_range = SpellRange(host, events=bus)

    # The first tick builds the spellbook and action bar indexes
    report = spell_range.tick()
    print(f"Initial tick rebuilt: {', '.join(report.rebuilt_names)}")

    # =================================================================
    # RANGE CHECKS (player spells)
    # =================================================================

    for spell in (133, "Fireball", "fireball", 143, 99999):
        result = spell_range.is_spell_in_range(spell, "target")
        print(f"  {spell!r:>12} on target -> {result}")

    # =================================================================
    # RANGE CHECKS (companion spells)
    # =================================================================

    # Growl is answered from the companion action bar for the current target
    print(f"Growl on target: {spell_range.is_spell_in_range('Growl', 'target')}")
    print(f"Growl has range: {spell_range.spell_has_range(2649)}")

    # =================================================================
    # HOST EVENTS
    # =================================================================

    # Host state changed: reload the host and tell the library
    snapshot = read_snapshot(SNAPSHOT_PATH)
    snapshot.spellbook[0].in_range["target"] = False
    host.load(snapshot)
    bus.emit(EventKind.CATALOG_CHANGED)
    report = spell_range.tick(force=True)
    print(f"After SPELLS_CHANGED, rebuilt: {', '.join(report.rebuilt_names)}")

    # Fireball stays cached as in range until its entry expires
    print(f"Fireball (cached): {spell_range.is_spell_in_range('Fireball', 'target')}")

    # =================================================================
    # STATISTICS
    # =================================================================

    stats = spell_range.stats()
    print(f"Cache: {stats['cache']}")
    print(f"Resolved by: {stats['resolver']['resolved_by']}")


if __name__ == "__main__":
    main()
