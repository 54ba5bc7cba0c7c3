from rest_framework import serializers
from apps.ledger.splits import PERCENTAGE_MODE, SHARES_MODE


def money(**kwargs):
    return serializers.DecimalField(max_digits=12, decimal_places=2, **kwargs)


class BalanceEntrySerializer(serializers.Serializer):
    paid = money()
    owes = money()
    net = money()


class EventBalanceSerializer(serializers.Serializer):
    """Balances of every participant within one event."""

    event_id = serializers.UUIDField()
    event_name = serializers.CharField()
    total_costs = money()
    total_payments = money()
    user_balances = serializers.DictField(child=BalanceEntrySerializer())


class GlobalBalanceSerializer(serializers.Serializer):
    """A player's balance across every event."""

    user_id = serializers.UUIDField()
    user_name = serializers.CharField()
    paid = money()
    owes = money()
    net = money()
    status = serializers.CharField()
    event_count = serializers.IntegerField()
    cost_item_count = serializers.IntegerField()
    payment_count = serializers.IntegerField()


class ParticipantStatsSerializer(serializers.Serializer):
    total = serializers.IntegerField()
    owing = serializers.IntegerField()
    owed = serializers.IntegerField()
    settled = serializers.IntegerField()


class EventStatisticsSerializer(serializers.Serializer):
    """Summary numbers for one event."""

    event_id = serializers.UUIDField()
    total_cost_items = serializers.IntegerField()
    total_payments = serializers.IntegerField()
    total_amount = money()
    total_payments_amount = money()
    average_cost_per_item = money()
    average_owed_per_user = money()
    participant_stats = ParticipantStatsSerializer()


class SettlementSerializer(serializers.Serializer):
    from_id = serializers.UUIDField()
    from_name = serializers.CharField()
    to_id = serializers.UUIDField()
    to_name = serializers.CharField()
    amount = money()
    description = serializers.CharField()


class SettlementSummarySerializer(serializers.Serializer):
    total_settlements = serializers.IntegerField()
    total_debt = money()
    total_credit = money()
    balanced = serializers.BooleanField()


class SettlementPlanSerializer(serializers.Serializer):
    """Suggested transfers that would settle everyone."""

    settlements = SettlementSerializer(many=True)
    summary = SettlementSummarySerializer()


class EqualSplitRequestSerializer(serializers.Serializer):
    """Input for an equal split over a list of participant ids."""

    participant_ids = serializers.ListField(child=serializers.CharField(), allow_empty=True)
    mode = serializers.ChoiceField(
        choices=[PERCENTAGE_MODE, SHARES_MODE], default=PERCENTAGE_MODE
    )


class SplitPayloadSerializer(serializers.Serializer):
    """A split as exposed by the API: one of the two maps is null."""

    split_mode = serializers.CharField()
    split_percentage = serializers.DictField(
        child=serializers.DecimalField(max_digits=5, decimal_places=2), allow_null=True
    )
    split_shares = serializers.DictField(child=serializers.IntegerField(), allow_null=True)


class SanitizeRequestSerializer(serializers.Serializer):
    """Input for sanitizing expense splits against a participant list."""

    participant_ids = serializers.ListField(child=serializers.CharField(), allow_empty=True)
    expenses = serializers.ListField(child=serializers.DictField(), allow_empty=True)
