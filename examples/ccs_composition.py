"""CCS Composition -- terms, single steps and full traces.

Demonstrates: Prefix, Choice, Compose, Restrict, Relabel, Recurse,
synchronization and cycle detection.
"""

from ccs_semantics import (
    HaltReason,
    Tracer,
    find_sync,
    parse,
    step,
)
from ccs_semantics.algebra import choice, compose, name, nil, prefix, rec, relabel, restrict

# --- Building terms directly ---
sender = prefix("!α", nil())
system = compose(
    choice(prefix("α", nil()), prefix("β", nil())),
    choice(sender, prefix("γ", nil())),
)
print(f"System: {system!r}")

# --- Synchronization: complementary actions meet ---
steps, result = find_sync(system.left, system.right)
print(f"Synchronizes to: {result!r} ({steps[-1].operand})")

# --- Choice prefers its left branch ---
_, chosen = step(choice(prefix("a", prefix("p", nil())), prefix("b", nil())))
print(f"Choice resolves to: {chosen!r}")

# --- Restriction hides a channel, relabeling renames it ---
print(f"Restricted a.nil\\a moves: {step(restrict(prefix('a', nil()), 'a')) is not None}")
trace, _ = step(relabel(prefix("a", nil()), {"a": "b"}))
print(f"Relabeled a.nil[b/a] fires: {trace[0].operand}")

# --- Recursion: _rec x.a.x comes back to itself ---
server = rec("x", prefix("a", name("x")))
_, unfolded = step(server)
print(f"Server after one step is unchanged: {unfolded == server}")

# --- Full traces ---
print("\n--- Trace of the synchronization example ---")
result = Tracer().run(parse("(α.nil + β.nil) | (!α.nil + γ.nil)"))
assert result.reason is HaltReason.NO_TRANSITION

print("\n--- Trace of a recursive server and a client ---")
result = Tracer(show_derivations=False).run(parse("(_rec x.a.!b.x) | !a.b.nil"))
print(f"Halted: {result.reason.name} after {result.count} transition(s)")
