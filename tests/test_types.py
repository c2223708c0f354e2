"""Tests for phases, phase contexts, handler identity and seen-sets."""

import pytest

from triggerforge.triggers import (
    CallbackHandler,
    Operation,
    Phase,
    PhaseContext,
    SeenSet,
    TriggerHandler,
    UnitOfWork,
    handler_identity,
)


class ContactHandler(TriggerHandler):
    pass


class PinnedHandler(TriggerHandler):
    name = "contacts"


class LabelledHandler(TriggerHandler):
    def __init__(self, label):
        self.name = label


# =============================================================================
# Phase / Operation
# =============================================================================


class TestPhase:
    def test_seven_phases(self):
        assert [p.value for p in Phase] == [
            "beforeInsert",
            "beforeUpdate",
            "beforeDelete",
            "afterInsert",
            "afterUpdate",
            "afterDelete",
            "afterUndelete",
        ]

    def test_before_and_after(self):
        assert Phase.BEFORE_DELETE.is_before
        assert not Phase.BEFORE_DELETE.is_after
        assert Phase.AFTER_UNDELETE.is_after

    def test_only_update_phases_have_previous(self):
        assert {p for p in Phase if p.has_previous} == {
            Phase.BEFORE_UPDATE,
            Phase.AFTER_UPDATE,
        }

    def test_method_names(self):
        assert Phase.BEFORE_INSERT.method_name == "before_insert"
        assert Phase.AFTER_UNDELETE.method_name == "after_undelete"

    def test_operation_phases(self):
        assert Operation.INSERT.phases == (Phase.BEFORE_INSERT, Phase.AFTER_INSERT)
        assert Operation.UPDATE.phases == (Phase.BEFORE_UPDATE, Phase.AFTER_UPDATE)
        assert Operation.DELETE.phases == (Phase.BEFORE_DELETE, Phase.AFTER_DELETE)
        assert Operation.UNDELETE.phases == (Phase.AFTER_UNDELETE,)


# =============================================================================
# PhaseContext
# =============================================================================


class TestPhaseContext:
    def test_update_requires_previous(self):
        with pytest.raises(ValueError, match="requires the previous record batch"):
            PhaseContext(phase=Phase.BEFORE_UPDATE, is_executing=True, new=[{"id": 1}])

    def test_update_batches_must_pair(self):
        with pytest.raises(ValueError, match="differ in length"):
            PhaseContext(
                phase=Phase.AFTER_UPDATE,
                is_executing=True,
                new=[{"id": 1}, {"id": 2}],
                old=[{"id": 1}],
            )

    def test_insert_rejects_previous(self):
        with pytest.raises(ValueError, match="does not take a previous"):
            PhaseContext(
                phase=Phase.AFTER_INSERT,
                is_executing=True,
                new=[{"id": 1}],
                old=[{"id": 1}],
            )

    def test_frozen(self):
        ctx = PhaseContext(phase=Phase.AFTER_INSERT, is_executing=True, new=[])
        with pytest.raises(AttributeError):
            ctx.is_executing = False


# =============================================================================
# handler_identity
# =============================================================================


class TestHandlerIdentity:
    def test_fully_qualified_type_name(self):
        expected = f"{ContactHandler.__module__}.ContactHandler"
        assert handler_identity(ContactHandler()) == expected
        assert handler_identity(ContactHandler) == expected

    def test_stable_across_instances(self):
        assert handler_identity(ContactHandler()) == handler_identity(ContactHandler())

    def test_declared_name_wins(self):
        assert handler_identity(PinnedHandler()) == "contacts"
        assert handler_identity(PinnedHandler) == "contacts"

    def test_instance_name_does_not_change_identity(self):
        expected = f"{LabelledHandler.__module__}.LabelledHandler"
        assert handler_identity(LabelledHandler("acme")) == expected
        assert handler_identity(LabelledHandler("globex")) == handler_identity(LabelledHandler)

    def test_class_name_wins_over_instance_name(self):
        handler = PinnedHandler()
        handler.name = "somethingElse"
        assert handler_identity(handler) == "contacts"

    def test_callback_handler_uses_its_name(self):
        handler = CallbackHandler("contactRollup")
        assert handler_identity(handler) == "contactRollup"
        assert handler.name == "contactRollup"

    def test_callback_handler_name_is_read_only(self):
        handler = CallbackHandler("contactRollup")
        with pytest.raises(AttributeError):
            handler.name = "other"
        assert handler_identity(handler) == "contactRollup"

    def test_string_passes_through(self):
        assert handler_identity("sendWelcomeEmail") == "sendWelcomeEmail"


class TestCallbackHandler:
    def test_unknown_callback_rejected(self):
        with pytest.raises(ValueError, match="Unknown phase callback"):
            CallbackHandler("bad", after_save=lambda new: None)

    def test_missing_callbacks_are_inert(self):
        handler = CallbackHandler("rollup")
        handler.after_update([{"id": 1}], [{"id": 1}])
        assert handler.callbacks == {}


# =============================================================================
# SeenSet
# =============================================================================


class TestSeenSet:
    def test_mark_returns_true_once(self):
        seen = SeenSet()
        assert seen.mark("C001") is True
        assert seen.mark("C001") is False
        assert "C001" in seen
        assert len(seen) == 1

    def test_discard_and_clear(self):
        seen = SeenSet()
        seen.mark("C001")
        seen.mark("C002")
        seen.discard("C001")
        assert list(seen) == ["C002"]
        seen.clear()
        assert len(seen) == 0

    def test_unit_of_work_named_sets(self):
        uow = UnitOfWork()
        assert uow.seen("recordIds") is uow.seen_record_ids
        assert uow.seen("keys") is uow.seen_keys
        assert uow.seen("emails") is uow.seen("emails")

    def test_dispatch_never_touches_seen_sets(self):
        from triggerforge.triggers import Dispatcher

        uow = UnitOfWork()
        uow.seen_record_ids.mark("C001")
        Dispatcher(uow).run(
            ContactHandler(),
            PhaseContext(phase=Phase.AFTER_INSERT, is_executing=True, new=[{"id": "C002"}]),
        )
        assert list(uow.seen_record_ids) == ["C001"]
