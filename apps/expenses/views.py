import uuid

from rest_framework import viewsets, status
from rest_framework.decorators import action
from rest_framework.response import Response
from rest_framework.pagination import PageNumberPagination
from drf_spectacular.utils import extend_schema, OpenApiParameter

from .models import CostItem, ExpenseTemplate
from .serializers import (
    CostItemSerializer,
    CostItemCreateSerializer,
    CostItemUpdateSerializer,
    SplitReplaceSerializer,
    CostItemBreakdownSerializer,
    ExpenseTemplateSerializer,
    ExpenseTemplateCreateSerializer,
    TemplateReorderSerializer,
    TemplateApplySerializer,
    ExpenseDataSerializer,
)

from apps.expenses.services import (
    create_cost_item,
    list_cost_items,
    update_cost_item,
    replace_split,
    delete_cost_item,
    get_cost_item_breakdown,
    create_template,
    update_template,
    delete_template,
    reorder_templates,
    list_templates,
    get_quick_add_templates,
    template_to_expense_data,
)
from apps.ledger.services.exceptions import LedgerValidationError


class CostItemPagination(PageNumberPagination):
    """Custom pagination for cost items."""
    page_size = 50
    page_size_query_param = 'page_size'
    max_page_size = 200


class CostItemViewSet(viewsets.ModelViewSet):
    """
    ViewSet for cost item (expense) operations.

    list: Get cost items, optionally of one event (?event=)
    create: Create a cost item with a percentage or shares split
    retrieve: Get a specific cost item
    update: Update description, amount, payer or date
    partial_update: Partially update those fields
    destroy: Delete a cost item
    """

    queryset = CostItem.objects.select_related('event', 'paid_by')
    serializer_class = CostItemSerializer
    pagination_class = CostItemPagination

    def get_queryset(self):
        event_id = self.request.query_params.get('event')
        if event_id:
            try:
                event_id = uuid.UUID(event_id)
            except ValueError:
                raise LedgerValidationError('Invalid event ID', field='event')
        return list_cost_items(event_id=event_id)

    def get_serializer_class(self):
        """Use different serializers for different actions."""
        if self.action == 'create':
            return CostItemCreateSerializer
        elif self.action in ['update', 'partial_update']:
            return CostItemUpdateSerializer
        elif self.action == 'split':
            return SplitReplaceSerializer
        return CostItemSerializer

    @extend_schema(
        parameters=[OpenApiParameter('event', str, description='Only cost items of this event')],
    )
    def list(self, request, *args, **kwargs):
        return super().list(request, *args, **kwargs)

    @extend_schema(request=CostItemCreateSerializer, responses={201: CostItemSerializer})
    def create(self, request, *args, **kwargs):
        """Create a new cost item."""
        serializer = CostItemCreateSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        data = serializer.validated_data

        item = create_cost_item(
            event_id=data['event'],
            description=data['description'],
            amount=data['amount'],
            paid_by_id=data['paid_by'],
            date=data.get('date'),
            split=data['split'],
        )

        output_serializer = CostItemSerializer(item)
        return Response(output_serializer.data, status=status.HTTP_201_CREATED)

    @extend_schema(request=CostItemUpdateSerializer, responses={200: CostItemSerializer})
    def update(self, request, *args, **kwargs):
        """Update the plain fields of a cost item; the split is replaced via /split/."""
        partial = kwargs.pop('partial', False)
        serializer = CostItemUpdateSerializer(data=request.data, partial=partial)
        serializer.is_valid(raise_exception=True)
        data = serializer.validated_data

        item = update_cost_item(
            cost_item_id=self.kwargs['pk'],
            description=data.get('description'),
            amount=data.get('amount'),
            date=data.get('date'),
            paid_by_id=data.get('paid_by'),
        )
        return Response(CostItemSerializer(item).data)

    def destroy(self, request, *args, **kwargs):
        """Delete a cost item."""
        delete_cost_item(cost_item_id=self.kwargs['pk'])
        return Response(status=status.HTTP_204_NO_CONTENT)

    @extend_schema(request=SplitReplaceSerializer, responses={200: CostItemSerializer})
    @action(detail=True, methods=['put'])
    def split(self, request, pk=None):
        """Replace the whole split of a cost item."""
        serializer = SplitReplaceSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        item = replace_split(cost_item_id=pk, split=serializer.validated_data['split'])
        return Response(CostItemSerializer(item).data)

    @extend_schema(responses={200: CostItemBreakdownSerializer})
    @action(detail=True, methods=['get'])
    def breakdown(self, request, pk=None):
        """Cent-exact amount each participant owes for this cost item."""
        breakdown = get_cost_item_breakdown(cost_item_id=pk)
        return Response(CostItemBreakdownSerializer(breakdown).data)


class ExpenseTemplateViewSet(viewsets.ModelViewSet):
    """
    ViewSet for expense templates.

    list: Get all templates in display order
    create: Create a template (appended to the display order)
    retrieve: Get a specific template
    update: Update a template
    partial_update: Partially update a template
    destroy: Delete a template
    """

    queryset = ExpenseTemplate.objects.select_related('default_paid_by')
    serializer_class = ExpenseTemplateSerializer
    pagination_class = None

    def get_queryset(self):
        return list_templates()

    def get_serializer_class(self):
        """Use different serializers for different actions."""
        if self.action in ['create', 'update', 'partial_update']:
            return ExpenseTemplateCreateSerializer
        elif self.action == 'reorder':
            return TemplateReorderSerializer
        elif self.action == 'apply':
            return TemplateApplySerializer
        return ExpenseTemplateSerializer

    @extend_schema(request=ExpenseTemplateCreateSerializer, responses={201: ExpenseTemplateSerializer})
    def create(self, request, *args, **kwargs):
        """Create a new template."""
        serializer = ExpenseTemplateCreateSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        data = serializer.validated_data

        template = create_template(
            name=data['name'],
            default_amount=data['default_amount'],
            category=data.get('category', ''),
            default_paid_by_id=data.get('default_paid_by'),
        )
        return Response(ExpenseTemplateSerializer(template).data, status=status.HTTP_201_CREATED)

    @extend_schema(request=ExpenseTemplateCreateSerializer, responses={200: ExpenseTemplateSerializer})
    def update(self, request, *args, **kwargs):
        """Update a template; PATCH only touches the fields it sends."""
        partial = kwargs.pop('partial', False)
        serializer = ExpenseTemplateCreateSerializer(data=request.data, partial=partial)
        serializer.is_valid(raise_exception=True)
        data = serializer.validated_data

        fields = {
            'name': data.get('name'),
            'default_amount': data.get('default_amount'),
            'category': data.get('category'),
        }
        if 'default_paid_by' in request.data:
            fields['default_paid_by_id'] = data.get('default_paid_by')

        template = update_template(template_id=self.kwargs['pk'], **fields)
        return Response(ExpenseTemplateSerializer(template).data)

    def destroy(self, request, *args, **kwargs):
        """Delete a template."""
        delete_template(template_id=self.kwargs['pk'])
        return Response(status=status.HTTP_204_NO_CONTENT)

    @extend_schema(
        parameters=[OpenApiParameter('limit', int, description='Number of templates (default 6)')],
        responses={200: ExpenseTemplateSerializer(many=True)},
    )
    @action(detail=False, methods=['get'])
    def quick_add(self, request):
        """First templates in display order, for the quick-add bar."""
        try:
            limit = int(request.query_params.get('limit', 6))
        except ValueError:
            raise LedgerValidationError('limit must be a whole number', field='limit')
        templates = get_quick_add_templates(limit=max(limit, 0))
        return Response(ExpenseTemplateSerializer(templates, many=True).data)

    @extend_schema(request=TemplateReorderSerializer, responses={200: ExpenseTemplateSerializer(many=True)})
    @action(detail=False, methods=['post'])
    def reorder(self, request):
        """Set the display order of several templates."""
        serializer = TemplateReorderSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        templates = reorder_templates(order_updates=serializer.validated_data['order_updates'])
        return Response(ExpenseTemplateSerializer(templates, many=True).data)

    @extend_schema(request=TemplateApplySerializer, responses={200: ExpenseDataSerializer})
    @action(detail=True, methods=['post'])
    def apply(self, request, pk=None):
        """Expense data prefilled from this template for one event."""
        serializer = TemplateApplySerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        data = template_to_expense_data(
            template_id=pk,
            event_id=serializer.validated_data['event'],
        )
        return Response(ExpenseDataSerializer(data).data)
