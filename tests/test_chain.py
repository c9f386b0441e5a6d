"""Tests for the chain of responsibility examples."""
import pytest
from patterns import (
    Approver,
    Expense,
    HandlerResult,
    Priority,
    SupportTicket,
    ThresholdHandler,
    build_chain,
    expense_approval_chain,
    handler_chain,
    support_chain,
    run_example,
)
from utils.exceptions import ConfigurationError, ValidationError


class TestExpenseApproval:
    """Tests for the three-level approval chain."""

    @pytest.mark.parametrize('amount, approver', [
        (500, 'Manager'),
        (4500, 'Director'),
        (12000, 'Vice President'),
    ])
    def test_each_tier(self, amount, approver):
        """Test that each expense lands on the expected approver."""
        result = expense_approval_chain().handle(Expense(amount))
        assert result.handled
        assert result.handled_by == approver

    def test_threshold_is_inclusive(self):
        """Test that an amount equal to a limit is approved there."""
        chain = expense_approval_chain()
        assert chain.handle(Expense(1000)).handled_by == 'Manager'
        assert chain.handle(Expense(1000.01)).handled_by == 'Director'
        assert chain.handle(Expense(20000)).handled_by == 'Vice President'

    def test_default_action_above_top_tier(self):
        """Test that large expenses need board approval."""
        result = expense_approval_chain().handle(Expense(25000))
        assert not result.handled
        assert result.handled_by is None
        assert result.message == 'Expense of $25,000.00 requires board approval'

    def test_message_format(self):
        """Test the approval message text."""
        result = expense_approval_chain().handle(Expense(4500))
        assert result.message == 'Director approved expense of $4,500.00'

    def test_zero_amount_goes_to_first_tier(self):
        """Test that a zero expense goes to the manager."""
        assert expense_approval_chain().handle(Expense(0)).handled_by == 'Manager'

    def test_negative_amount_rejected(self):
        """Test rejecting negative amounts."""
        with pytest.raises(ValidationError):
            Expense(-1)

    def test_non_numeric_amount_rejected(self):
        """Test rejecting non-numeric amounts."""
        with pytest.raises(ValidationError):
            Expense('500')

    def test_chain_order(self):
        """Test the order of the approval chain."""
        names = [handler.name for handler in expense_approval_chain().chain()]
        assert names == ['Manager', 'Director', 'Vice President']


class TestSupportTickets:
    """Tests for priority-based ticket routing."""

    def test_routing_by_priority(self):
        """Test routing tickets by priority."""
        chain = support_chain()
        assert chain.handle(SupportTicket(1, Priority.LOW)).handled_by == 'Front Desk'
        assert chain.handle(SupportTicket(2, Priority.MEDIUM)).handled_by == 'Technical Support'
        assert chain.handle(SupportTicket(3, Priority.HIGH)).handled_by == 'Engineering'

    def test_critical_is_escalated(self):
        """Test that critical tickets fall through to escalation."""
        result = support_chain().handle(SupportTicket(7, Priority.CRITICAL))
        assert not result.handled
        assert result.message == 'Ticket #7 (CRITICAL) escalated to incident management'

    def test_priority_coerced_from_int(self):
        """Test building a ticket from an integer priority."""
        ticket = SupportTicket(5, 3)
        assert ticket.priority is Priority.HIGH
        assert ticket.magnitude == 3

    @pytest.mark.parametrize('ticket_id', [0, -3, 'abc', True])
    def test_invalid_ticket_id(self, ticket_id):
        """Test rejecting invalid ticket ids."""
        with pytest.raises(ValidationError):
            SupportTicket(ticket_id, Priority.LOW)

    def test_unknown_priority(self):
        """Test rejecting unknown priorities."""
        with pytest.raises(ValidationError):
            SupportTicket(1, 9)


class TestChainMechanics:
    """Tests for linking and traversal."""

    def test_set_next_returns_successor(self):
        """Test that set_next returns the linked handler."""
        first = ThresholdHandler('first', 1)
        second = ThresholdHandler('second', 2)
        third = ThresholdHandler('third', 3)

        assert first.set_next(second).set_next(third) is third
        assert [h.name for h in first.chain()] == ['first', 'second', 'third']

    def test_cycle_rejected(self):
        """Test that linking back into the chain is refused."""
        first = ThresholdHandler('first', 1)
        second = ThresholdHandler('second', 2)
        first.set_next(second)

        with pytest.raises(ConfigurationError):
            second.set_next(first)
        with pytest.raises(ConfigurationError):
            first.set_next(first)

    def test_empty_chain_rejected(self):
        """Test building a chain from no handlers."""
        with pytest.raises(ConfigurationError):
            build_chain([])

    def test_default_without_custom_action(self):
        """Test the built-in default action."""
        head = build_chain([Approver('Clerk', 10)])
        result = head.handle(Expense(50))
        assert result.handled_by is None
        assert 'No handler accepted' in result.message

    def test_each_handler_visited_once(self):
        """Test that traversal visits each handler once."""
        visits = []

        class CountingHandler(ThresholdHandler):
            def can_handle(self, request):
                visits.append(self.name)
                return super().can_handle(request)

        head = build_chain([CountingHandler('a', 1), CountingHandler('b', 2), CountingHandler('c', 3)])
        head.handle(Expense(2))
        assert visits == ['a', 'b']

        visits.clear()
        head.handle(Expense(99))
        assert visits == ['a', 'b', 'c']

    def test_custom_default(self):
        """Test installing a custom default action."""
        head = build_chain(
            [ThresholdHandler('only', 1)],
            default=lambda request: HandlerResult(None, request, 'fallback')
        )
        assert head.handle(Expense(5)).message == 'fallback'


class TestFunctionChain:
    """Tests for the function-based chain."""

    def test_first_non_none_wins(self):
        """Test that the first function returning a result wins."""
        route = handler_chain(
            lambda n: 'small' if n < 10 else None,
            lambda n: 'medium' if n < 100 else None,
            default=lambda n: 'large'
        )
        assert route(3) == 'small'
        assert route(42) == 'medium'
        assert route(500) == 'large'

    def test_falsy_result_still_handles(self):
        """Test that a falsy result other than None still counts."""
        route = handler_chain(lambda n: 0, default=lambda n: 'default')
        assert route(1) == 0


class TestChainExample:
    """Tests for the documented transcript."""

    def test_transcript(self):
        """Test the chain example transcript."""
        lines = run_example('chain_of_responsibility')
        assert lines[:4] == [
            'Manager approved expense of $500.00',
            'Director approved expense of $4,500.00',
            'Vice President approved expense of $12,000.00',
            'Expense of $25,000.00 requires board approval',
        ]
        assert lines[4] == ''
        assert lines[-1] == 'Ticket #104 (CRITICAL) escalated to incident management'
