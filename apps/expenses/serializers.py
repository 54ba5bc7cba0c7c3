from rest_framework import serializers
from .models import CostItem, ExpenseTemplate
from apps.ledger.splits import split_from_payload, split_to_payload


class SplitPayloadMixin:
    """Turns ``split_percentage`` / ``split_shares`` into a single ``split``."""

    def validate(self, attrs):
        attrs = super().validate(attrs)
        split_percentage = attrs.pop('split_percentage', None)
        split_shares = attrs.pop('split_shares', None)
        attrs['split'] = split_from_payload(
            split_percentage=split_percentage,
            split_shares=split_shares,
        )
        return attrs


class CostItemSerializer(serializers.ModelSerializer):
    """Main serializer for cost items."""

    paid_by_name = serializers.CharField(source='paid_by.name', read_only=True)
    split_percentage = serializers.SerializerMethodField()
    split_shares = serializers.SerializerMethodField()

    class Meta:
        model = CostItem
        fields = [
            'id',
            'event',
            'description',
            'amount',
            'paid_by',
            'paid_by_name',
            'date',
            'split_mode',
            'split_percentage',
            'split_shares',
            'created_at',
            'updated_at',
        ]
        read_only_fields = fields

    def get_split_percentage(self, obj):
        return split_to_payload(obj.split)['split_percentage']

    def get_split_shares(self, obj):
        return split_to_payload(obj.split)['split_shares']


class CostItemCreateSerializer(SplitPayloadMixin, serializers.Serializer):
    """
    Input for creating a cost item.

    Send either ``split_percentage`` (participant id → percent) or
    ``split_shares`` (participant id → whole number). When both are sent the
    shares win. Without either, the amount is split equally.
    """

    event = serializers.UUIDField()
    description = serializers.CharField(max_length=200)
    amount = serializers.DecimalField(max_digits=10, decimal_places=2)
    paid_by = serializers.UUIDField()
    date = serializers.DateField(required=False)
    split_percentage = serializers.DictField(required=False, allow_null=True)
    split_shares = serializers.DictField(required=False, allow_null=True)


class CostItemUpdateSerializer(serializers.Serializer):
    """Input for updating the plain fields of a cost item."""

    description = serializers.CharField(max_length=200, required=False)
    amount = serializers.DecimalField(max_digits=10, decimal_places=2, required=False)
    paid_by = serializers.UUIDField(required=False)
    date = serializers.DateField(required=False)


class SplitReplaceSerializer(SplitPayloadMixin, serializers.Serializer):
    """Input for replacing a cost item's whole split."""

    split_percentage = serializers.DictField(required=False, allow_null=True)
    split_shares = serializers.DictField(required=False, allow_null=True)

    def validate(self, attrs):
        attrs = super().validate(attrs)
        if attrs['split'] is None:
            raise serializers.ValidationError(
                'Provide split_percentage or split_shares'
            )
        return attrs


class AllocationSerializer(serializers.Serializer):
    player_id = serializers.CharField()
    player_name = serializers.CharField()
    weight = serializers.DecimalField(max_digits=12, decimal_places=2)
    amount = serializers.DecimalField(max_digits=12, decimal_places=2)


class CostItemBreakdownSerializer(serializers.Serializer):
    """Cent-exact allocation of one cost item."""

    cost_item_id = serializers.UUIDField()
    description = serializers.CharField()
    amount = serializers.DecimalField(max_digits=12, decimal_places=2)
    split_mode = serializers.CharField()
    total_allocated = serializers.DecimalField(max_digits=12, decimal_places=2)
    allocations = AllocationSerializer(many=True)


class ExpenseTemplateSerializer(serializers.ModelSerializer):
    """Main serializer for expense templates."""

    default_paid_by_name = serializers.CharField(
        source='default_paid_by.name', read_only=True, default=None
    )

    class Meta:
        model = ExpenseTemplate
        fields = [
            'id',
            'name',
            'default_amount',
            'category',
            'default_paid_by',
            'default_paid_by_name',
            'order',
            'created_at',
            'updated_at',
        ]
        read_only_fields = fields


class ExpenseTemplateCreateSerializer(serializers.Serializer):
    """Input for creating or updating an expense template."""

    name = serializers.CharField(max_length=100)
    default_amount = serializers.DecimalField(max_digits=10, decimal_places=2)
    category = serializers.CharField(max_length=50, required=False, allow_blank=True, default='')
    default_paid_by = serializers.UUIDField(required=False, allow_null=True, default=None)


class TemplateOrderSerializer(serializers.Serializer):
    id = serializers.UUIDField()
    order = serializers.IntegerField(min_value=0)


class TemplateReorderSerializer(serializers.Serializer):
    """Input for reordering templates."""

    order_updates = TemplateOrderSerializer(many=True, allow_empty=False)


class TemplateApplySerializer(serializers.Serializer):
    """Input for applying a template to an event."""

    event = serializers.UUIDField()


class ExpenseDataSerializer(serializers.Serializer):
    """Prefilled expense data produced from a template."""

    event = serializers.UUIDField()
    description = serializers.CharField()
    amount = serializers.DecimalField(max_digits=10, decimal_places=2)
    paid_by = serializers.CharField(allow_null=True)
    date = serializers.DateField()
    split_mode = serializers.CharField()
    split_shares = serializers.DictField(child=serializers.IntegerField())
    split_percentage = serializers.DictField(allow_null=True)
    template = serializers.UUIDField()
