"""Leaf sets and the monophyly test used to score hypothesis clades."""

from __future__ import annotations

from typing import AbstractSet, Dict, FrozenSet

import treeswift

Taxon = str


def get_leaf_set(tree: treeswift.Tree) -> set[Taxon]:
    leaves = set()
    for node in tree.root.traverse_preorder():
        if node.label is None:
            continue
        if node.is_leaf():
            leaves.add(str(node.label))
    return leaves


def leaf_sets_by_node(tree: treeswift.Tree) -> Dict[treeswift.Node, FrozenSet[Taxon]]:
    leaf_sets: Dict[treeswift.Node, FrozenSet[Taxon]] = {}
    for node in tree.root.traverse_postorder():
        if node.is_leaf():
            leaf_sets[node] = frozenset() if node.label is None else frozenset([str(node.label)])
        else:
            merged: set[Taxon] = set()
            for child in node.children:
                merged |= leaf_sets[child]
            leaf_sets[node] = frozenset(merged)
    return leaf_sets


def is_monophyletic(tree: treeswift.Tree, taxon_set: AbstractSet[Taxon]) -> bool:
    """Return True if `taxon_set` forms a clade of `tree`.

    Trees are read as unrooted: the query is monophyletic when it, or its
    complement among the leaves, is exactly the leaf set below some node.
    Query taxa absent from the tree are ignored, so a reduced taxon sample
    is scored on the taxa it does contain. A query with no taxa in the tree
    is never monophyletic; a query covering every leaf always is.
    """
    if not taxon_set:
        raise ValueError("taxon_set cannot be empty")
    leaves = frozenset(get_leaf_set(tree))
    query = frozenset(str(t) for t in taxon_set) & leaves
    if not query:
        return False
    if query == leaves:
        return True
    complement = leaves - query
    for node, subset in leaf_sets_by_node(tree).items():
        if node is tree.root:
            continue
        if subset == query or subset == complement:
            return True
    return False
