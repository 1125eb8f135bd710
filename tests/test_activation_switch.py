# -*- coding: utf-8 -*-
from __future__ import annotations

import pytest

from services.activation_switch import ActivationSwitch
from services.view_tree import MemoryNavIndicator, MemoryViewTree


def _tree(*ids: str) -> MemoryViewTree:
    tree = MemoryViewTree()
    for sid in ids:
        tree.create_container(sid)
    return tree


def test_activate_shows_only_target_and_updates_pointer():
    tree = _tree("dashboard", "users", "moves")
    nav = MemoryNavIndicator()
    switch = ActivationSwitch(view_tree=tree, nav_indicator=nav)
    assert switch.active_section is None

    switch.activate("users")
    assert tree.visible_ids() == ["users"]
    assert switch.active_section == "users"
    assert nav.active == "users"

    switch.activate("moves")
    assert tree.visible_ids() == ["moves"]
    assert nav.history == ["users", "moves"]


def test_activate_is_idempotent():
    tree = _tree("dashboard", "users")
    switch = ActivationSwitch(view_tree=tree)

    for _ in range(5):
        switch.activate("dashboard")

    assert tree.visible_ids() == ["dashboard"]
    assert switch.active_section == "dashboard"


def test_activate_hides_stray_visible_containers():
    tree = _tree("dashboard", "users")
    for c in tree.containers:
        c.visible = True
    switch = ActivationSwitch(view_tree=tree)

    switch.activate("users")

    assert tree.visible_ids() == ["users"]


def test_activate_without_container_raises_and_keeps_state():
    tree = _tree("dashboard")
    switch = ActivationSwitch(view_tree=tree)
    switch.activate("dashboard")

    with pytest.raises(LookupError):
        switch.activate("users")

    assert switch.active_section == "dashboard"
    assert tree.visible_ids() == ["dashboard"]


def test_clear_hides_everything():
    tree = _tree("dashboard", "users")
    nav = MemoryNavIndicator()
    switch = ActivationSwitch(view_tree=tree, nav_indicator=nav)
    switch.activate("users")

    switch.clear()

    assert tree.visible_ids() == []
    assert switch.active_section is None
    assert nav.active is None
