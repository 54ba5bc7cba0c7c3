"""
Expenses app services layer.

Services contain business logic and orchestrate operations across models.
All state-changing operations use transactions and concurrency protection.
"""

from .exceptions import (
    CostItemNotFoundError,
    SplitParticipantError,
    TemplateNotFoundError,
)

from .cost_item_management import (
    create_cost_item,
    get_cost_item_by_id,
    list_cost_items,
    update_cost_item,
    replace_split,
    delete_cost_item,
    get_cost_item_breakdown,
    resolve_split,
)

from .template_management import (
    create_template,
    get_template_by_id,
    update_template,
    delete_template,
    reorder_templates,
    list_templates,
    get_quick_add_templates,
    template_to_expense_data,
)


__all__ = [
    # Exceptions
    'CostItemNotFoundError',
    'SplitParticipantError',
    'TemplateNotFoundError',

    # Cost Item Management
    'create_cost_item',
    'get_cost_item_by_id',
    'list_cost_items',
    'update_cost_item',
    'replace_split',
    'delete_cost_item',
    'get_cost_item_breakdown',
    'resolve_split',

    # Template Management
    'create_template',
    'get_template_by_id',
    'update_template',
    'delete_template',
    'reorder_templates',
    'list_templates',
    'get_quick_add_templates',
    'template_to_expense_data',
]
