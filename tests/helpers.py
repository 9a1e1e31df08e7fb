import random

from abtutor.tree import NodeKind, create_tree, generate_root


def random_tree(seed, kind=NodeKind.MAX, depth=4, branching_factor=3):
    tree = create_tree(kind, depth, branching_factor)
    generate_root(tree, -20, 20, rng=random.Random(seed))
    return tree


RANDOM_SHAPES = [
    (seed, kind, depth, bf)
    for seed in (1, 7, 42)
    for kind in (NodeKind.MAX, NodeKind.MIN)
    for depth, bf in ((3, 2), (4, 3), (5, 2))
]
