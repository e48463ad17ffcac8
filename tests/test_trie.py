import gc
import json

from gridtrie.trie import Trie, TrieNode


def _make_trie(words: list[str]) -> Trie:
    trie = Trie()
    for w in words:
        trie.insert(w)
    return trie


def test_add_child_idempotent():
    root = TrieNode()
    a1 = root.add_child("a")
    a2 = root.add_child("a")
    assert a1 is a2
    assert list(root.children) == ["a"]
    assert a1.parent is root
    assert a1.value == "a"
    assert root.parent is None and root.value is None


def test_is_leaf():
    root = TrieNode()
    assert root.is_leaf
    root.add_child("x")
    assert not root.is_leaf


def test_insert_and_contains():
    trie = _make_trie(["car", "card", "cart", "cat"])
    for w in ["car", "card", "cart", "cat"]:
        assert trie.contains(w) is True
    assert trie.contains("ca") is False
    assert trie.contains("cars") is False
    assert trie.contains("dog") is False
    assert "cart" in trie
    assert 42 not in trie


def test_empty_word_rejected():
    trie = Trie()
    trie.insert("")
    assert trie.count == 0
    assert trie.is_empty
    assert trie.contains("") is False
    assert trie.remove("") is False
    assert trie.root.is_terminating is False


def test_case_insensitive():
    trie = _make_trie(["cat"])
    assert trie.contains("Cat") == trie.contains("cat") is True
    trie.insert("DOG")
    assert trie.contains("dog")
    assert trie.words == ["cat", "dog"]


def test_idempotent_insert():
    trie = Trie()
    trie.insert("word")
    assert trie.count == 1
    trie.insert("word")
    trie.insert("WORD")
    assert trie.count == 1
    assert len(trie) == 1


def test_remove_restores_prior_state():
    trie = _make_trie(["bat", "batch", "bath", "dog"])
    assert trie.count == 4

    assert trie.remove("batch") is True
    assert not trie.contains("batch")
    assert trie.count == 3
    for w in ["bat", "bath", "dog"]:
        assert trie.contains(w)


def test_remove_missing_word_is_noop():
    trie = _make_trie(["bat", "batch"])
    assert trie.remove("ba") is False  # chain exists but not terminating
    assert trie.remove("batman") is False
    assert trie.remove("zzz") is False
    assert trie.count == 2
    assert trie.contains("bat") and trie.contains("batch")


def test_remove_word_with_extensions_keeps_nodes():
    trie = _make_trie(["bat", "batch"])
    assert trie.remove("bat") is True
    assert not trie.contains("bat")
    assert trie.contains("batch")
    t_node = trie.root.children["b"].children["a"].children["t"]
    assert t_node.is_terminating is False
    assert "c" in t_node.children


def test_leaf_pruning_keeps_shared_prefix():
    trie = _make_trie(["cat", "car"])
    trie.remove("cat")
    a_node = trie.root.children["c"].children["a"]
    assert "t" not in a_node.children
    assert "r" in a_node.children
    assert trie.contains("car")
    assert trie.count == 1


def test_pruning_stops_at_terminating_ancestor():
    trie = _make_trie(["car", "cards"])
    trie.remove("cards")
    r_node = trie.root.children["c"].children["a"].children["r"]
    assert r_node.is_terminating
    assert r_node.is_leaf
    assert trie.contains("car")


def test_removing_last_word_empties_root():
    trie = _make_trie(["solo"])
    trie.remove("solo")
    assert trie.root.is_leaf
    assert trie.is_empty
    assert trie.words == []


def test_find_words_with_prefix():
    trie = _make_trie(["cat", "car", "care", "dog"])
    assert set(trie.find_words_with_prefix("ca")) == {"cat", "car", "care"}
    assert trie.find_words_with_prefix("care") == ["care"]
    assert trie.find_words_with_prefix("dog") == ["dog"]
    assert trie.find_words_with_prefix("dogs") == []
    assert trie.find_words_with_prefix("x") == []
    assert set(trie.find_words_with_prefix("CA")) == {"cat", "car", "care"}


def test_find_words_with_prefix_missing():
    trie = _make_trie(["cat", "car", "care"])
    assert trie.find_words_with_prefix("dog") == []


def test_words_preorder_insertion_order():
    trie = _make_trie(["b", "ba", "a", "bab"])
    # Pre-order: a word is emitted before its extensions; siblings in insertion order
    assert trie.words == ["b", "ba", "bab", "a"]
    assert list(trie) == trie.words
    assert trie.find_words_with_prefix("") == trie.words


def test_count_matches_terminating_nodes():
    trie = _make_trie(["a", "ab", "abc", "b", "bc"])
    trie.remove("ab")
    trie.remove("bc")

    terminating = 0
    stack = [trie.root]
    while stack:
        node = stack.pop()
        terminating += node.is_terminating
        stack.extend(node.children.values())
    assert terminating == trie.count == 3


def test_long_word_enumeration():
    word = "x" * 5000
    trie = _make_trie([word])
    assert trie.words == [word]


def test_dump_and_load(tmp_path):
    trie = _make_trie(["cat", "car", "care", "dog"])
    path = tmp_path / "words.json"
    trie.dump(path)

    assert set(json.loads(path.read_text())["words"]) == {"cat", "car", "care", "dog"}

    loaded = Trie.load(path)
    assert set(loaded.words) == set(trie.words)
    assert loaded.count == trie.count


def test_from_dict_missing_words():
    assert Trie.from_dict({}).is_empty


def test_parent_link_does_not_keep_parent_alive():
    trie = _make_trie(["ab"])
    child = trie.root.children["a"]
    grandchild = child.children["b"]
    assert child.parent is trie.root

    del trie
    gc.collect()
    assert child.parent is None
    # The child still owns its own subtree
    assert grandchild.parent is child


def test_remove_after_many_inserts_and_removals():
    words = [f"w{i:03d}" for i in range(300)] + ["w", "w1", "w10"]
    trie = _make_trie(words)
    removed = words[::2]
    for w in removed:
        assert trie.remove(w) is True
    kept = [w for w in words if w not in set(removed)]

    assert trie.count == len(kept)
    assert set(trie.words) == set(kept)
    for w in removed:
        assert not trie.contains(w)

    for w in kept:
        assert trie.remove(w) is True
    assert trie.is_empty
    assert trie.root.is_leaf
