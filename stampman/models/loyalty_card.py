"""Stamp card definitions and per-member progress."""

from django.db import models
from django.utils.translation import gettext_lazy as _


class LoyaltyCard(models.Model):
    """Card definition: collect total_stamps stamps, get the reward."""

    name = models.CharField(_("name"), max_length=100)
    description = models.CharField(_("description"), max_length=200, blank=True)
    total_stamps = models.PositiveIntegerField(
        _("stamps required"),
        help_text=_("Stamps needed to complete the card"),
    )
    reward = models.CharField(
        _("reward"),
        max_length=150,
        help_text=_("Reward text copied into minted coupons"),
    )
    category = models.CharField(_("category"), max_length=50, blank=True)
    is_active = models.BooleanField(_("active"), default=True)
    created_at = models.DateTimeField(_("created at"), auto_now_add=True)

    class Meta:
        db_table = "stampman_loyalty_card"
        verbose_name = _("loyalty card")
        verbose_name_plural = _("loyalty cards")
        ordering = ["name"]
        constraints = [
            models.CheckConstraint(
                condition=models.Q(total_stamps__gt=0),
                name="stampman_card_total_stamps_positive",
            ),
        ]

    def __str__(self):
        return f"{self.name} ({self.total_stamps} stamps)"


class StampCard(models.Model):
    """
    A member's progress on one LoyaltyCard.

    Created lazily on the first stamp assignment. After every update
    ``stamps`` is in [0, card.total_stamps); completed rounds are counted
    in times_completed. Workflows never delete these rows.
    """

    member = models.ForeignKey(
        "stampman.Member",
        on_delete=models.CASCADE,
        related_name="stamp_cards",
        verbose_name=_("member"),
    )
    card = models.ForeignKey(
        LoyaltyCard,
        on_delete=models.CASCADE,
        related_name="member_cards",
        verbose_name=_("card"),
    )
    stamps = models.PositiveIntegerField(_("stamps"), default=0)
    times_completed = models.PositiveIntegerField(_("times completed"), default=0)
    started_at = models.DateTimeField(_("started at"), auto_now_add=True)
    last_completed_at = models.DateTimeField(_("last completed at"), null=True, blank=True)
    updated_at = models.DateTimeField(_("updated at"), auto_now=True)

    class Meta:
        db_table = "stampman_stamp_card"
        verbose_name = _("stamp card")
        verbose_name_plural = _("stamp cards")
        constraints = [
            models.UniqueConstraint(
                fields=["member", "card"],
                name="stampman_unique_member_card",
            ),
        ]

    def __str__(self):
        return f"{self.member_id} · {self.card.name}: {self.stamps}/{self.card.total_stamps}"

    @property
    def completed(self) -> bool:
        return self.times_completed > 0

    @property
    def stamps_remaining(self) -> int:
        """Stamps remaining to complete the current round."""
        return max(0, self.card.total_stamps - self.stamps)

    @property
    def progress_percent(self) -> int:
        """Current round completion percentage (0-100)."""
        if self.card.total_stamps <= 0:
            return 100
        return min(100, int(self.stamps / self.card.total_stamps * 100))
