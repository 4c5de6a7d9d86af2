"""
Status transitions — the only operations that change a product's status.

Every committed change writes, in one transaction:
- the product (status, location, last_moved_at, shipped_at)
- one Movement (ledger)
- one AuditLog entry

Validation runs before anything is written. The commit locks the product
row and only applies the change if the stored status is still the one the
caller validated against.
"""

import logging
from dataclasses import dataclass
from decimal import Decimal, InvalidOperation

from django.core.exceptions import ValidationError
from django.db import DatabaseError, IntegrityError, transaction
from django.utils import timezone

from trackman.conf import trackman_settings
from trackman.exceptions import LifecycleError
from trackman.graph import STATUS_GRAPH, TransitionEdge
from trackman.models.audit import AuditLog
from trackman.models.enums import AuditAction, ProductStatus
from trackman.models.movement import Movement
from trackman.models.product import Product
from trackman.services.resolver import PolicyResolver

logger = logging.getLogger('trackman')

# Landing on these stamps Product.shipped_at
SHIPPED_STATUSES = frozenset({ProductStatus.DELIVERED, ProductStatus.ELIMINATED})


@dataclass(frozen=True)
class TransitionResult:
    """What change_status() committed."""

    product: Product
    movement: Movement
    transition: TransitionEdge

    def as_payload(self) -> dict:
        """Response body in the shape the HTTP layer returns."""
        return {
            'message': 'Status alterado com sucesso',
            'product': self.product,
            'transition': self.transition.as_dict(),
        }


def _parse_status(value) -> ProductStatus:
    try:
        return ProductStatus(value)
    except ValueError:
        raise LifecycleError(
            'INVALID_STATUS',
            attempted_status=value,
            valid_statuses=list(ProductStatus.values),
        ) from None


def _clean(value: str | None) -> str:
    return (value or '').strip()


def _audit(action, product, user):
    return AuditLog.objects.create(
        action=action,
        entity='Product',
        entity_id=str(product.pk),
        user=user,
        company_id=product.company_id,
    )


class StatusTransitions:
    """State-changing lifecycle methods."""

    @classmethod
    def receive(cls, company, internal_code, description, quantity, unit,
                user=None, location=None, observations=''):
        """
        Register a product entering the warehouse.

        Creates the Product at RECEIVED, its creation Movement
        (previous_status=None) and a CREATE audit entry.

        Raises:
            LifecycleError('MISSING_REQUIRED_FIELDS'): If code, description or unit is blank
            LifecycleError('INVALID_QUANTITY'): If quantity is not a positive number
                that fits Product.quantity
            LifecycleError('DUPLICATE_CODE'): If the company already uses internal_code
        """
        code = _clean(internal_code)
        description = _clean(description)
        unit = _clean(unit)
        missing = [
            name for name, value in (
                ('internal_code', code),
                ('description', description),
                ('unit', unit),
            )
            if not value
        ]
        if missing:
            raise LifecycleError('MISSING_REQUIRED_FIELDS', missing_fields=missing)

        try:
            quantity = Decimal(str(quantity))
        except (InvalidOperation, ValueError):
            raise LifecycleError('INVALID_QUANTITY', requested=quantity) from None
        if not quantity.is_finite() or quantity <= 0:
            raise LifecycleError('INVALID_QUANTITY', requested=quantity)
        try:
            # max_digits / decimal_places of the column
            quantity = Product._meta.get_field('quantity').clean(quantity, None)
        except ValidationError:
            raise LifecycleError('INVALID_QUANTITY', requested=quantity) from None

        if Product.objects.filter(company=company, internal_code=code).exists():
            raise LifecycleError('DUPLICATE_CODE', internal_code=code)

        try:
            with transaction.atomic():
                product = Product.objects.create(
                    company=company,
                    internal_code=code,
                    description=description,
                    quantity=quantity,
                    unit=unit,
                    current_location=_clean(location) or trackman_settings.DEFAULT_LOCATION,
                    observations=observations or '',
                    status=ProductStatus.RECEIVED,
                )
                Movement.objects.create(
                    product=product,
                    previous_status=None,
                    new_status=ProductStatus.RECEIVED,
                    quantity=product.quantity,
                    location=product.current_location,
                    reason=trackman_settings.CREATION_REASON,
                    user=user,
                )
                _audit(AuditAction.CREATE, product, user)
        except IntegrityError:
            # Lost a race against another receive() with the same code
            raise LifecycleError('DUPLICATE_CODE', internal_code=code) from None

        logger.info(
            "product.received",
            extra={
                "product_id": product.pk,
                "internal_code": code,
                "qty": str(quantity),
                "location": product.current_location,
            },
        )
        return product

    @classmethod
    def change_status(cls, product, new_status, user=None, role=None,
                      reason=None, location=None, **fields):
        """
        Move a product to `new_status`.

        `product.status` is taken as the status the caller read; it is
        checked again under lock before anything is written.

        Args:
            product: Product as loaded by the caller
            new_status: Target ProductStatus (or its string value)
            user: Acting user, recorded on the movement and audit entry
            role: Role of the acting user, or resolved Capabilities
            reason: Free text; required by some transitions
            location: New location (None = keep current)
            **fields: Extra evidence checked against the edge's policy

        Returns:
            TransitionResult with the refreshed product

        Raises:
            LifecycleError('INVALID_STATUS'): Unknown target status
            LifecycleError('NO_OP_TRANSITION'): Target equals current status
            LifecycleError('ILLEGAL_TRANSITION'): Not an edge of the status graph
            LifecycleError('PERMISSION_DENIED'): Role lacks the required privilege
            LifecycleError('MISSING_REQUIRED_FIELDS'): Required evidence absent
            LifecycleError('PRODUCT_NOT_FOUND'): Product no longer exists
            LifecycleError('COMMIT_CONFLICT'): Stored status changed since it was read
            LifecycleError('PERSISTENCE_FAILURE'): Database error during commit

        Concurrency:
            - Runs under transaction.atomic()
            - Uses select_for_update() on Product
            - Conditional update on the status read by the caller
            - Never retries
        """
        target = _parse_status(new_status)
        current = ProductStatus(product.status)

        if current == target:
            raise LifecycleError('NO_OP_TRANSITION', status=current)

        if not PolicyResolver.is_legal(current, target):
            raise LifecycleError(
                'ILLEGAL_TRANSITION',
                current_status=current,
                attempted_status=target,
                allowed_next_states=list(STATUS_GRAPH.edges_from(current)),
            )

        authorization = PolicyResolver.authorize(current, target, role)
        if not authorization.allowed:
            raise LifecycleError('PERMISSION_DENIED', reason=authorization.reason)

        payload = {'reason': reason, 'location': location, **fields}
        validation = PolicyResolver.validate_fields(current, target, payload)
        if not validation.valid:
            raise LifecycleError(
                'MISSING_REQUIRED_FIELDS',
                missing_fields=list(validation.missing_fields),
            )

        try:
            movement = cls._commit(product, current, target, user, reason, location)
        except DatabaseError as exc:
            logger.error(
                "product.status_persistence_failure",
                extra={
                    "product_id": product.pk,
                    "from": current.value,
                    "to": target.value,
                    "error": str(exc),
                },
            )
            raise LifecycleError('PERSISTENCE_FAILURE', product_id=product.pk) from exc

        product.refresh_from_db()
        logger.info(
            "product.status_changed",
            extra={
                "product_id": product.pk,
                "from": current.value,
                "to": target.value,
                "movement_id": movement.pk,
            },
        )
        return TransitionResult(
            product=product,
            movement=movement,
            transition=TransitionEdge(current, target),
        )

    @classmethod
    def _commit(cls, product, current, target, user, reason, location) -> Movement:
        with transaction.atomic():
            try:
                locked = Product.objects.select_for_update().get(pk=product.pk)
            except Product.DoesNotExist:
                raise LifecycleError('PRODUCT_NOT_FOUND', product_id=product.pk) from None

            if locked.status != current:
                cls._conflict(product, current, locked.status)

            now = timezone.now()
            new_location = _clean(location) or locked.current_location
            changes = {
                'status': target,
                'current_location': new_location,
                'last_moved_at': now,
                'updated_at': now,
            }
            if target in SHIPPED_STATUSES:
                changes['shipped_at'] = now

            # Compare-and-swap on the validated status
            updated = Product.objects.filter(pk=locked.pk, status=current).update(**changes)
            if updated != 1:
                cls._conflict(product, current, None)

            movement = Movement.objects.create(
                product=locked,
                previous_status=current,
                new_status=target,
                quantity=locked.quantity,
                location=new_location,
                reason=_clean(reason) or f"Mudança de status: {current.value} → {target.value}",
                user=user,
                created_at=now,
            )
            _audit(AuditAction.STATUS_CHANGE, locked, user)
            return movement

    @classmethod
    def _conflict(cls, product, expected, stored):
        logger.warning(
            "product.status_conflict",
            extra={
                "product_id": product.pk,
                "expected": str(expected),
                "stored": str(stored),
            },
        )
        raise LifecycleError(
            'COMMIT_CONFLICT',
            expected_status=expected,
            current_status=stored,
        )
