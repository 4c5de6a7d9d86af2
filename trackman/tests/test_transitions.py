"""
Tests for the status applier (lifecycle.change_status) and lifecycle.receive.
"""

from decimal import Decimal

import pytest
from django.db import DatabaseError, models
from django.test import override_settings

from trackman import lifecycle, LifecycleError
from trackman.models import AuditAction, AuditLog, Movement, Product, ProductStatus, Role


S = ProductStatus
pytestmark = pytest.mark.django_db


class TestReceive:
    """Tests for lifecycle.receive()."""

    def test_receive_creates_product_movement_and_audit(self, product, user, company):
        assert product.status == S.RECEIVED
        assert product.current_location == 'Cais 1'
        assert product.quantity == Decimal('12')

        movement = product.movements.get()
        assert movement.previous_status is None
        assert movement.is_creation
        assert movement.new_status == S.RECEIVED
        assert movement.quantity == Decimal('12')
        assert movement.reason == 'Produto criado e recebido no sistema.'
        assert movement.user == user

        audit = AuditLog.objects.get(entity='Product', entity_id=str(product.pk))
        assert audit.action == AuditAction.CREATE
        assert audit.company == company

    def test_receive_default_location(self, company):
        product = lifecycle.receive(company, 'A-1', 'Caixa', 3, 'un')
        assert product.current_location == 'Localização não definida'

    @override_settings(TRACKMAN={'DEFAULT_LOCATION': 'Doca de entrada'})
    def test_receive_configured_default_location(self, company):
        product = lifecycle.receive(company, 'A-2', 'Caixa', 3, 'un', location='   ')
        assert product.current_location == 'Doca de entrada'

    @pytest.mark.parametrize('quantity', [0, -1, 'abc', 'NaN', None, Decimal('1e12'), Decimal('0.0001')])
    def test_receive_invalid_quantity(self, company, quantity):
        with pytest.raises(LifecycleError) as exc:
            lifecycle.receive(company, 'A-3', 'Caixa', quantity, 'un')

        assert exc.value.code == 'INVALID_QUANTITY'
        assert not Product.objects.exists()

    def test_receive_largest_quantity_round_trips(self, company):
        """Quantities at the column limit are stored and read back."""
        product = lifecycle.receive(company, 'A-4', 'Caixa', Decimal('999999999.999'), 'un')

        product.refresh_from_db()
        assert product.quantity == Decimal('999999999.999')
        assert lifecycle.history(product).get().quantity == Decimal('999999999.999')

    def test_receive_blank_fields(self, company):
        with pytest.raises(LifecycleError) as exc:
            lifecycle.receive(company, '   ', '', 1, None)

        error = exc.value
        assert error.code == 'MISSING_REQUIRED_FIELDS'
        assert error.missing_fields == ['internal_code', 'description', 'unit']
        assert error.as_payload() == {
            'error': 'Campos obrigatórios em falta',
            'missingFields': ['internal_code', 'description', 'unit'],
        }
        assert not Product.objects.exists()
        assert not AuditLog.objects.exists()

    def test_receive_single_blank_field(self, company):
        with pytest.raises(LifecycleError) as exc:
            lifecycle.receive(company, 'A-5', 'Caixa', 1, ' ')

        assert exc.value.missing_fields == ['unit']

    def test_receive_duplicate_code_in_same_company(self, product, company):
        with pytest.raises(LifecycleError) as exc:
            lifecycle.receive(company, 'PAL-0001', 'Outra palete', 1, 'un')

        assert exc.value.code == 'DUPLICATE_CODE'
        assert exc.value.http_status == 409

    def test_same_code_in_other_company(self, product, other_company):
        other = lifecycle.receive(other_company, 'PAL-0001', 'Palete', 1, 'un')
        assert other.pk != product.pk


class TestChangeStatus:
    """Tests for lifecycle.change_status()."""

    def test_operator_moves_received_to_analysis(self, product, user):
        result = lifecycle.change_status(product, 'IN_ANALYSIS', user=user, role=Role.OPERATOR)

        assert result.product.status == S.IN_ANALYSIS
        assert result.transition.as_dict() == {'from': 'RECEIVED', 'to': 'IN_ANALYSIS'}
        assert not lifecycle.is_final(result.product.status)

        latest = lifecycle.history(product).first()
        assert latest == result.movement
        assert latest.previous_status == S.RECEIVED
        assert latest.new_status == S.IN_ANALYSIS
        assert latest.reason == 'Mudança de status: RECEIVED → IN_ANALYSIS'
        assert latest.quantity == Decimal('12')
        assert product.movements.count() == 2

    def test_change_writes_audit_entry(self, product, user, company):
        lifecycle.change_status(product, S.IN_ANALYSIS, user=user, role=Role.OPERATOR)

        audit = AuditLog.objects.filter(action=AuditAction.STATUS_CHANGE).get()
        assert audit.entity == 'Product'
        assert audit.entity_id == str(product.pk)
        assert audit.user == user
        assert audit.company == company

    def test_change_updates_caller_instance(self, product, user):
        lifecycle.change_status(product, S.IN_ANALYSIS, user=user, role=Role.OPERATOR)

        assert product.status == S.IN_ANALYSIS
        assert product.last_moved_at is not None
        assert product.shipped_at is None

    def test_location_kept_when_not_given(self, product, user):
        lifecycle.change_status(product, S.IN_ANALYSIS, user=user, role=Role.OPERATOR)
        assert product.current_location == 'Cais 1'
        assert product.movements.first().location == 'Cais 1'

    def test_location_updated_when_given(self, make_product, user):
        product = make_product(S.APPROVED)
        result = lifecycle.change_status(
            product, S.IN_STORAGE, user=user, role=Role.OPERATOR, location='Estante B4'
        )
        assert result.product.current_location == 'Estante B4'
        assert result.movement.location == 'Estante B4'

    def test_long_reason_kept_whole(self, make_product, user):
        """Free-text reasons are not limited to a short column."""
        product = make_product(S.IN_ANALYSIS)
        reason = 'Embalagem rasgada e humidade visível. ' * 20

        result = lifecycle.change_status(
            product, S.REJECTED, user=user, role=Role.ADMIN, reason=reason
        )

        assert len(reason) > 255
        assert isinstance(Movement._meta.get_field('reason'), models.TextField)
        assert Movement.objects.get(pk=result.movement.pk).reason == reason.strip()

    def test_custom_reason_recorded(self, make_product, user):
        product = make_product(S.IN_ANALYSIS)
        result = lifecycle.change_status(
            product, S.REJECTED, user=user, role=Role.ADMIN, reason='Produto danificado'
        )
        assert result.movement.reason == 'Produto danificado'

    @pytest.mark.parametrize('target', [S.DELIVERED, S.ELIMINATED])
    def test_final_statuses_set_shipped_at(self, make_product, user, target):
        source = S.IN_SHIPPING if target == S.DELIVERED else S.IN_RETURN
        product = make_product(source)

        result = lifecycle.change_status(product, target, user=user, role=Role.OPERATOR)

        assert result.product.shipped_at is not None
        assert result.product.shipped_at == result.product.last_moved_at
        assert result.product.is_final

    def test_reactivation_after_cancel(self, make_product, user):
        product = make_product(S.CANCELLED)
        result = lifecycle.change_status(product, S.IN_STORAGE, user=user, role=Role.OPERATOR)
        assert result.product.status == S.IN_STORAGE

    def test_as_payload(self, product, user):
        result = lifecycle.change_status(product, S.IN_ANALYSIS, user=user, role=Role.OPERATOR)
        payload = result.as_payload()

        assert payload['message'] == 'Status alterado com sucesso'
        assert payload['product'] is product
        assert payload['transition'] == {'from': 'RECEIVED', 'to': 'IN_ANALYSIS'}


class TestChangeStatusRejections:
    """Validation failures never write anything."""

    def _assert_untouched(self, product, status, movements):
        product.refresh_from_db()
        assert product.status == status
        assert product.movements.count() == movements
        assert not AuditLog.objects.filter(action=AuditAction.STATUS_CHANGE).exists()

    def test_unknown_status(self, product, user):
        with pytest.raises(LifecycleError) as exc:
            lifecycle.change_status(product, 'LOST', user=user, role=Role.ADMIN)

        assert exc.value.code == 'INVALID_STATUS'
        assert 'RECEIVED' in exc.value.as_payload()['validStatuses']
        self._assert_untouched(product, S.RECEIVED, 1)

    def test_same_status_is_noop_error(self, product, user):
        with pytest.raises(LifecycleError) as exc:
            lifecycle.change_status(product, S.RECEIVED, user=user, role=Role.ADMIN)

        assert exc.value.code == 'NO_OP_TRANSITION'
        assert exc.value.as_payload() == {'error': 'Produto já se encontra neste status'}
        assert exc.value.http_status == 400
        self._assert_untouched(product, S.RECEIVED, 1)

    def test_illegal_jump(self, product, user):
        with pytest.raises(LifecycleError) as exc:
            lifecycle.change_status(product, S.APPROVED, user=user, role=Role.ADMIN)

        error = exc.value
        assert error.code == 'ILLEGAL_TRANSITION'
        assert error.allowed_next_states == [S.IN_ANALYSIS]
        assert error.as_payload() == {
            'error': 'Transição não permitida',
            'currentStatus': 'RECEIVED',
            'attemptedStatus': 'APPROVED',
            'allowedNextStates': ['IN_ANALYSIS'],
        }
        self._assert_untouched(product, S.RECEIVED, 1)

    def test_leaving_final_status(self, make_product, user):
        product = make_product(S.DELIVERED)

        with pytest.raises(LifecycleError) as exc:
            lifecycle.change_status(product, S.IN_SHIPPING, user=user, role=Role.ADMIN)

        assert exc.value.code == 'ILLEGAL_TRANSITION'
        assert exc.value.allowed_next_states == []

    def test_operator_cannot_approve(self, make_product, user):
        product = make_product(S.IN_ANALYSIS)

        with pytest.raises(LifecycleError) as exc:
            lifecycle.change_status(product, S.APPROVED, user=user, role=Role.OPERATOR)

        error = exc.value
        assert error.code == 'PERMISSION_DENIED'
        assert error.http_status == 403
        assert error.as_payload() == {
            'error': 'Permissão negada',
            'reason': 'Esta transição requer permissões de Administrador',
        }
        self._assert_untouched(product, S.IN_ANALYSIS, 0)

    def test_role_checked_before_fields(self, make_product, user):
        """Operator rejecting without reason gets the permission error."""
        product = make_product(S.IN_ANALYSIS)

        with pytest.raises(LifecycleError) as exc:
            lifecycle.change_status(product, S.REJECTED, user=user, role=Role.OPERATOR)

        assert exc.value.code == 'PERMISSION_DENIED'

    @pytest.mark.parametrize('reason', [None, '', '   '])
    def test_rejection_needs_reason(self, make_product, user, reason):
        product = make_product(S.IN_ANALYSIS)

        with pytest.raises(LifecycleError) as exc:
            lifecycle.change_status(product, S.REJECTED, user=user, role=Role.ADMIN, reason=reason)

        error = exc.value
        assert error.code == 'MISSING_REQUIRED_FIELDS'
        assert error.missing_fields == ['reason']
        assert error.as_payload() == {
            'error': 'Campos obrigatórios em falta',
            'missingFields': ['reason'],
        }
        self._assert_untouched(product, S.IN_ANALYSIS, 0)

    def test_validation_errors_are_deterministic(self, make_product, user):
        product = make_product(S.IN_ANALYSIS)
        codes = []
        for _ in range(2):
            with pytest.raises(LifecycleError) as exc:
                lifecycle.change_status(product, S.APPROVED, user=user, role=Role.OPERATOR)
            codes.append(exc.value.as_dict())

        assert codes[0] == codes[1]
        assert codes[0]['code'] == 'PERMISSION_DENIED'


class TestConcurrency:
    """
    Stale reads never get applied.

    Two writers are simulated in sequence: the second one holds a product
    read before the first commit. This covers the locked re-read and the
    conditional update, not truly parallel database sessions.
    """

    def test_second_writer_gets_conflict(self, make_product, user):
        product = make_product(S.IN_STORAGE)
        first = Product.objects.get(pk=product.pk)
        second = Product.objects.get(pk=product.pk)

        lifecycle.change_status(first, S.IN_PREPARATION, user=user, role=Role.OPERATOR)

        with pytest.raises(LifecycleError) as exc:
            lifecycle.change_status(second, S.IN_SHIPPING, user=user, role=Role.OPERATOR)

        assert exc.value.code == 'COMMIT_CONFLICT'
        assert exc.value.is_transient
        assert exc.value.http_status == 409

        product.refresh_from_db()
        assert product.status == S.IN_PREPARATION
        assert product.movements.count() == 1
        assert AuditLog.objects.filter(action=AuditAction.STATUS_CHANGE).count() == 1

    def test_retry_with_fresh_state(self, make_product, user):
        product = make_product(S.IN_STORAGE)
        stale = Product.objects.get(pk=product.pk)
        lifecycle.change_status(product, S.IN_SHIPPING, user=user, role=Role.OPERATOR)

        with pytest.raises(LifecycleError) as exc:
            lifecycle.change_status(stale, S.IN_PREPARATION, user=user, role=Role.OPERATOR)
        assert exc.value.code == 'COMMIT_CONFLICT'

        stale.refresh_from_db()
        with pytest.raises(LifecycleError) as exc:
            lifecycle.change_status(stale, S.IN_PREPARATION, user=user, role=Role.OPERATOR)
        assert exc.value.code == 'ILLEGAL_TRANSITION'

    def test_resubmitting_applied_change_is_noop(self, make_product, user):
        product = make_product(S.IN_STORAGE)
        lifecycle.change_status(product, S.IN_PREPARATION, user=user, role=Role.OPERATOR)

        with pytest.raises(LifecycleError) as exc:
            lifecycle.change_status(product, S.IN_PREPARATION, user=user, role=Role.OPERATOR)

        assert exc.value.code == 'NO_OP_TRANSITION'
        assert not exc.value.is_transient
        assert product.movements.count() == 1

    def test_deleted_product(self, make_product, user):
        product = make_product(S.RECEIVED)
        Product.objects.filter(pk=product.pk).delete()

        with pytest.raises(LifecycleError) as exc:
            lifecycle.change_status(product, S.IN_ANALYSIS, user=user, role=Role.OPERATOR)

        assert exc.value.code == 'PRODUCT_NOT_FOUND'
        assert exc.value.http_status == 404


class TestPersistenceFailure:
    """A failing commit leaves nothing behind."""

    def test_movement_failure_rolls_back_product(self, product, user, monkeypatch):
        def broken_create(*args, **kwargs):
            raise DatabaseError('disk full')

        monkeypatch.setattr(Movement.objects, 'create', broken_create)

        with pytest.raises(LifecycleError) as exc:
            lifecycle.change_status(product, S.IN_ANALYSIS, user=user, role=Role.OPERATOR)

        assert exc.value.code == 'PERSISTENCE_FAILURE'
        assert exc.value.http_status == 500
        assert isinstance(exc.value.__cause__, DatabaseError)

        monkeypatch.undo()
        product.refresh_from_db()
        assert product.status == S.RECEIVED
        assert product.last_moved_at is None
        assert product.movements.count() == 1
        assert not AuditLog.objects.filter(action=AuditAction.STATUS_CHANGE).exists()


class TestLedgerImmutability:
    """Movements and audit entries are append-only."""

    def test_movement_cannot_be_updated(self, product):
        movement = product.movements.get()
        movement.reason = 'Outro motivo'

        with pytest.raises(ValueError):
            movement.save()

    def test_movement_cannot_be_deleted(self, product):
        with pytest.raises(ValueError):
            product.movements.get().delete()

    def test_audit_entry_cannot_be_changed(self, product):
        audit = AuditLog.objects.get()

        with pytest.raises(ValueError):
            audit.save()
        with pytest.raises(ValueError):
            audit.delete()
