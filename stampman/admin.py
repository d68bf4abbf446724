"""Stampman admin.

Approve/reject actions call the workflows with ``request.user`` as the
acting user, so they are only offered when the configured AUTHORIZER
accepts that user (e.g. DjangoStaffAuthorizer).
"""

from django.contrib import admin, messages
from django.utils.html import format_html

from stampman.exceptions import StampmanError
from stampman.gates import Gates
from stampman.models import (
    Branch,
    Coupon,
    LoyaltyCard,
    Member,
    Notification,
    NotificationRead,
    PointTransaction,
    Promotion,
    Purchase,
    Redemption,
    Reward,
    StampCard,
    SystemSettings,
)
from stampman.services.purchases import PurchaseService
from stampman.services.redemptions import RedemptionService

_STATUS_COLORS = {
    "pending": "#f0ad4e",
    "approved": "#28a745",
    "rejected": "#dc3545",
    "active": "#28a745",
    "inactive": "#6c757d",
    "used": "#6c757d",
    "expired": "#dc3545",
}


def status_badge(obj):
    color = _STATUS_COLORS.get(obj.status, "#6c757d")
    return format_html(
        '<span style="background:{}; color:#fff; padding:2px 8px; '
        'border-radius:3px; font-size:11px;">{}</span>',
        color,
        obj.get_status_display(),
    )


status_badge.short_description = "Status"


class WorkflowActionsMixin:
    """Hide approve/reject actions from users the authorizer refuses."""

    workflow_actions = ("approve_selected", "reject_selected")

    def get_actions(self, request):
        actions = super().get_actions(request)
        if not Gates.check_acting_user_authorized(request.user):
            for name in self.workflow_actions:
                actions.pop(name, None)
        return actions

    def _run_workflow(self, request, queryset, operation, verb):
        done = 0
        for obj in queryset:
            try:
                operation(obj.pk, acting_user=request.user)
                done += 1
            except StampmanError as e:
                self.message_user(request, f"#{obj.pk}: {e.message}", level=messages.ERROR)
        if done:
            self.message_user(request, f"{done} record(s) {verb}.", level=messages.SUCCESS)


# ===========================================
# Members
# ===========================================


class PointTransactionInline(admin.TabularInline):
    model = PointTransaction
    extra = 0
    readonly_fields = ["kind", "points", "balance_after", "description", "reference", "created_at"]
    ordering = ["-created_at"]

    def has_add_permission(self, request, obj=None):
        return False

    def has_delete_permission(self, request, obj=None):
        return False


class StampCardInline(admin.TabularInline):
    model = StampCard
    extra = 0
    readonly_fields = ["card", "stamps", "times_completed", "last_completed_at"]

    def has_add_permission(self, request, obj=None):
        return False

    def has_delete_permission(self, request, obj=None):
        return False


@admin.register(Member)
class MemberAdmin(admin.ModelAdmin):
    list_display = ["code", "name", "role", "points_balance", "lifetime_points", "tier", "is_active"]
    list_filter = ["role", "tier", "is_active"]
    search_fields = ["code", "name", "email"]
    # Balances only move through the workflows
    readonly_fields = ["points_balance", "lifetime_points", "created_at", "updated_at"]
    inlines = [StampCardInline, PointTransactionInline]


@admin.register(Branch)
class BranchAdmin(admin.ModelAdmin):
    list_display = ["name", "city", "manager", status_badge, "created_at"]
    list_filter = ["status", "city"]
    search_fields = ["name", "city", "manager"]


@admin.register(SystemSettings)
class SystemSettingsAdmin(admin.ModelAdmin):
    list_display = ["__str__", "points_expiration_days", "updated_at"]

    def has_add_permission(self, request):
        return not SystemSettings.objects.exists()

    def has_delete_permission(self, request, obj=None):
        return False


# ===========================================
# Catalogue
# ===========================================


@admin.register(Promotion)
class PromotionAdmin(admin.ModelAdmin):
    list_display = ["title", "kind", "value", "starts_at", "ends_at", status_badge]
    list_filter = ["kind", "status"]
    search_fields = ["title"]
    date_hierarchy = "starts_at"


@admin.register(LoyaltyCard)
class LoyaltyCardAdmin(admin.ModelAdmin):
    list_display = ["name", "total_stamps", "reward", "category", "is_active"]
    list_filter = ["category", "is_active"]
    search_fields = ["name", "reward"]


@admin.register(Reward)
class RewardAdmin(admin.ModelAdmin):
    list_display = ["name", "points", "is_active"]
    list_filter = ["is_active"]
    search_fields = ["name"]


# ===========================================
# Workflows
# ===========================================


@admin.register(Purchase)
class PurchaseAdmin(WorkflowActionsMixin, admin.ModelAdmin):
    list_display = [
        "pk",
        "member",
        "branch",
        "amount",
        "points_display",
        status_badge,
        "submitted_at",
        "decided_by",
    ]
    list_filter = ["status", "branch"]
    search_fields = ["member__code", "description", "receipt"]
    readonly_fields = [
        "points",
        "base_points",
        "multiplier",
        "bonus_points",
        "status",
        "submitted_at",
        "approved_at",
        "decided_at",
        "decided_by",
    ]
    actions = ["approve_selected", "reject_selected"]
    date_hierarchy = "submitted_at"

    def has_add_permission(self, request):
        return False

    def points_display(self, obj):
        if obj.multiplier != 1 or obj.bonus_points:
            return format_html(
                "{} <small>({} × {} + {})</small>",
                obj.points,
                obj.base_points,
                obj.multiplier,
                obj.bonus_points,
            )
        return obj.points

    points_display.short_description = "Points"

    @admin.action(description="Approve selected purchases (no stamps)")
    def approve_selected(self, request, queryset):
        self._run_workflow(request, queryset, PurchaseService.approve, "approved")

    @admin.action(description="Reject selected purchases")
    def reject_selected(self, request, queryset):
        self._run_workflow(request, queryset, PurchaseService.reject, "rejected")


@admin.register(Redemption)
class RedemptionAdmin(WorkflowActionsMixin, admin.ModelAdmin):
    list_display = ["pk", "member", "reward_name", "points", status_badge, "requested_at"]
    list_filter = ["status"]
    search_fields = ["member__code", "reward_name"]
    readonly_fields = ["reward_name", "points", "status", "requested_at", "decided_at", "decided_by"]
    actions = ["approve_selected", "reject_selected"]

    def has_add_permission(self, request):
        return False

    @admin.action(description="Approve selected redemptions")
    def approve_selected(self, request, queryset):
        self._run_workflow(request, queryset, RedemptionService.approve, "approved")

    @admin.action(description="Reject selected redemptions (refund points)")
    def reject_selected(self, request, queryset):
        self._run_workflow(request, queryset, RedemptionService.reject, "rejected")


# ===========================================
# Outputs
# ===========================================


@admin.register(StampCard)
class StampCardAdmin(admin.ModelAdmin):
    list_display = ["member", "card", "stamps", "times_completed", "last_completed_at"]
    list_filter = ["card"]
    search_fields = ["member__code", "card__name"]
    # Progress only moves through purchase approvals
    readonly_fields = ["member", "card", "stamps", "times_completed", "last_completed_at"]

    def has_add_permission(self, request):
        return False


@admin.register(Coupon)
class CouponAdmin(admin.ModelAdmin):
    list_display = ["code", "member", "name", status_badge, "created_at"]
    list_filter = ["status", "card"]
    search_fields = ["code", "member__code"]
    readonly_fields = ["code", "member", "card", "purchase", "created_at"]

    def has_add_permission(self, request):
        return False


@admin.register(PointTransaction)
class PointTransactionAdmin(admin.ModelAdmin):
    list_display = ["created_at", "member", "kind", "points_display", "balance_after", "description"]
    list_filter = ["kind"]
    search_fields = ["member__code", "description", "reference"]
    readonly_fields = [
        "member",
        "kind",
        "points",
        "balance_after",
        "description",
        "reference",
        "created_at",
        "created_by",
    ]
    date_hierarchy = "created_at"

    def has_add_permission(self, request):
        return False

    def has_delete_permission(self, request, obj=None):
        return False

    def points_display(self, obj):
        if obj.points > 0:
            return format_html('<span style="color:green">+{}</span>', obj.points)
        return format_html('<span style="color:red">{}</span>', obj.points)

    points_display.short_description = "Points"


@admin.register(Notification)
class NotificationAdmin(admin.ModelAdmin):
    list_display = ["created_at", "member", "kind", "sender", "message"]
    list_filter = ["kind"]
    search_fields = ["member__code", "message"]


@admin.register(NotificationRead)
class NotificationReadAdmin(admin.ModelAdmin):
    list_display = ["read_at", "member", "notification"]
    search_fields = ["member__code"]
    readonly_fields = ["member", "notification", "read_at"]

    def has_add_permission(self, request):
        return False
