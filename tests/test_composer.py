"""
Tests for the atomic group composer — append, build, sign and submit stages.

Tests: AtomicGroupComposer, Group, SignedGroup
"""
import asyncio
import copy
import time

import pytest
from algosdk import transaction
from algosdk.error import AlgodHTTPError

from algokit_client.composer import AtomicGroupComposer, Group, SignedGroup
from algokit_client.domain.enums import IntentKind
from algokit_client.domain.intents import PaymentIntent, RawIntent
from algokit_client.exceptions import (
    ConfirmationTimeoutError,
    NetworkError,
    RejectionError,
    ValidationError,
)
from tests.conftest import FIRST_ROUND, GROUP_TX_ID, make_suggested_params


def _raw_payment(sender, receiver, amount=1):
    return transaction.PaymentTxn(
        sender=sender.address,
        sp=make_suggested_params(),
        receiver=receiver.address,
        amt=amount,
    )


async def _alice_bob_group(algorand_client, alice, bob) -> Group:
    composer = AtomicGroupComposer(algorand_client)
    await composer.append_payment(alice.address, bob.address, 5)
    await composer.append_payment(bob.address, alice.address, 3)
    return await composer.build()


class TestAppend:
    """Tests for the append_* operations."""

    @pytest.mark.unit
    @pytest.mark.asyncio
    async def test_append_returns_composer(self, algorand_client, alice, bob):
        composer = AtomicGroupComposer(algorand_client)
        result = await composer.append_payment(alice.address, bob.address, 5)
        assert result is composer
        assert len(composer) == 1

    @pytest.mark.unit
    @pytest.mark.asyncio
    async def test_each_append_fetches_params(self, algorand_client, mock_algod_client, alice, bob):
        """Every parameterised append fetches suggested params once."""
        composer = AtomicGroupComposer(algorand_client)
        await composer.append_payment(alice.address, bob.address, 5)
        await composer.append_asset_transfer(42, alice.address, bob.address, 10)
        await composer.append_asset_opt_in(42, bob.address)
        await composer.append_application_call(7, alice.address, [b"hello"])
        assert mock_algod_client.suggested_params.call_count == 4

    @pytest.mark.unit
    @pytest.mark.asyncio
    async def test_append_raw_does_not_fetch_params(self, algorand_client, mock_algod_client, alice, bob):
        composer = AtomicGroupComposer(algorand_client)
        await composer.append_raw(_raw_payment(alice, bob))
        mock_algod_client.suggested_params.assert_not_called()
        assert composer.intents[0].kind == IntentKind.RAW

    @pytest.mark.unit
    @pytest.mark.asyncio
    async def test_append_raw_rejects_non_transaction(self, algorand_client):
        composer = AtomicGroupComposer(algorand_client)
        with pytest.raises(ValidationError):
            await composer.append_raw("not a transaction")

    @pytest.mark.unit
    @pytest.mark.asyncio
    async def test_note_string_is_utf8_encoded(self, algorand_client, alice, bob):
        composer = AtomicGroupComposer(algorand_client)
        await composer.append_payment(alice.address, bob.address, 5, note="Hello Algorand!")
        intent = composer.intents[0]
        assert isinstance(intent, PaymentIntent)
        assert intent.note == b"Hello Algorand!"

    @pytest.mark.unit
    @pytest.mark.asyncio
    async def test_param_fetch_failure_is_network_error(self, algorand_client, mock_algod_client, alice, bob):
        """A failed fetch propagates and appends nothing."""
        mock_algod_client.suggested_params.side_effect = ConnectionRefusedError("connection refused")
        composer = AtomicGroupComposer(algorand_client)
        with pytest.raises(NetworkError):
            await composer.append_payment(alice.address, bob.address, 5)
        assert len(composer) == 0

    @pytest.mark.unit
    @pytest.mark.asyncio
    async def test_invalid_receiver_fails_before_fetch(self, algorand_client, mock_algod_client, alice):
        composer = AtomicGroupComposer(algorand_client)
        with pytest.raises(ValidationError):
            await composer.append_payment(alice.address, "NOT_AN_ADDRESS", 5)
        mock_algod_client.suggested_params.assert_not_called()

    @pytest.mark.unit
    @pytest.mark.asyncio
    async def test_concurrent_appends_keep_call_order(self, algorand_client, mock_algod_client, alice, bob):
        """Appends started together land in the order they were called."""
        def slow_params():
            time.sleep(0.01)
            return make_suggested_params()

        mock_algod_client.suggested_params.side_effect = slow_params
        composer = AtomicGroupComposer(algorand_client)
        await asyncio.gather(*(composer.append_payment(alice.address, bob.address, amount) for amount in range(1, 6)))
        assert [intent.amount for intent in composer.intents] == [1, 2, 3, 4, 5]


class TestBuild:
    """Tests for build()."""

    @pytest.mark.unit
    @pytest.mark.asyncio
    async def test_empty_build_raises_without_network_call(self, algorand_client, mock_algod_client):
        composer = AtomicGroupComposer(algorand_client)
        with pytest.raises(ValidationError, match="empty"):
            await composer.build()
        mock_algod_client.suggested_params.assert_not_called()
        mock_algod_client.send_transactions.assert_not_called()

    @pytest.mark.unit
    @pytest.mark.asyncio
    async def test_group_preserves_append_order(self, algorand_client, alice, bob):
        composer = AtomicGroupComposer(algorand_client)
        await composer.append_payment(alice.address, bob.address, 5)
        await composer.append_asset_transfer(42, alice.address, bob.address, 10)
        await composer.append_asset_opt_in(42, bob.address)
        await composer.append_application_call(7, alice.address)
        await composer.append_raw(_raw_payment(bob, alice))

        group = await composer.build()

        assert group.transaction_count == 5
        assert [txn.type for txn in group.transactions] == ["pay", "axfer", "axfer", "appl", "pay"]
        opt_in = group.transactions[2]
        assert opt_in.sender == opt_in.receiver == bob.address
        assert opt_in.amount == 0

    @pytest.mark.unit
    @pytest.mark.asyncio
    async def test_validity_window_defaults_to_1000_rounds(self, algorand_client, alice, bob):
        composer = AtomicGroupComposer(algorand_client)
        await composer.append_payment(alice.address, bob.address, 5)
        txn = (await composer.build()).transactions[0]
        assert txn.first_valid_round == FIRST_ROUND
        assert txn.last_valid_round == FIRST_ROUND + 1000
        assert txn.fee == 1000

    @pytest.mark.unit
    @pytest.mark.asyncio
    async def test_custom_validity_window(self, algorand_client, alice, bob):
        composer = AtomicGroupComposer(algorand_client, validity_window=10)
        await composer.append_payment(alice.address, bob.address, 5)
        txn = (await composer.build()).transactions[0]
        assert txn.last_valid_round == FIRST_ROUND + 10

    @pytest.mark.unit
    @pytest.mark.asyncio
    async def test_congested_per_byte_fee_priced_by_size(self, algorand_client, mock_algod_client, alice, bob):
        """A 20 microAlgo/byte fee yields more than the 1000 minimum for a payment."""
        def congested():
            sp = make_suggested_params()
            sp.fee = 20
            return sp

        mock_algod_client.suggested_params.side_effect = congested
        composer = AtomicGroupComposer(algorand_client)
        await composer.append_payment(alice.address, bob.address, 5)
        txn = (await composer.build()).transactions[0]
        assert txn.fee > 1000
        assert txn.fee % 20 == 0

    @pytest.mark.unit
    @pytest.mark.asyncio
    async def test_every_transaction_carries_group_id(self, algorand_client, alice, bob):
        group = await _alice_bob_group(algorand_client, alice, bob)
        assert all(txn.group == group.group_id for txn in group.transactions)
        assert len(group.group_id) == 32

    @pytest.mark.unit
    @pytest.mark.asyncio
    async def test_group_id_is_hash_of_members_without_group_field(self, algorand_client, alice, bob):
        group = await _alice_bob_group(algorand_client, alice, bob)
        stripped = [copy.deepcopy(txn) for txn in group.transactions]
        for txn in stripped:
            txn.group = None
        assert transaction.calculate_group_id(stripped) == group.group_id

    @pytest.mark.unit
    @pytest.mark.asyncio
    async def test_building_twice_gives_same_group_id(self, algorand_client, alice, bob):
        composer = AtomicGroupComposer(algorand_client)
        await composer.append_payment(alice.address, bob.address, 5)
        await composer.append_payment(bob.address, alice.address, 3)
        before = composer.intents

        first = await composer.build()
        second = await composer.build()

        assert first.group_id == second.group_id
        assert first.tx_ids == second.tx_ids
        assert composer.intents == before
        assert first.transactions[0] is not second.transactions[0]

    @pytest.mark.unit
    @pytest.mark.asyncio
    async def test_build_leaves_raw_transaction_untouched(self, algorand_client, alice, bob):
        raw = _raw_payment(alice, bob)
        composer = AtomicGroupComposer(algorand_client)
        await composer.append_raw(raw)
        await composer.append_payment(bob.address, alice.address, 3)
        await composer.build()
        assert raw.group is None

    @pytest.mark.unit
    @pytest.mark.asyncio
    async def test_stale_group_on_raw_transaction_is_replaced(self, algorand_client, alice, bob):
        raw = _raw_payment(alice, bob)
        raw.group = b"\x01" * 32
        composer = AtomicGroupComposer(algorand_client)
        await composer.append_raw(raw)
        group = await composer.build()
        assert group.transactions[0].group == group.group_id != b"\x01" * 32

    @pytest.mark.unit
    @pytest.mark.asyncio
    async def test_raw_transaction_mutated_after_append_is_ignored(self, algorand_client, alice, bob):
        raw = _raw_payment(alice, bob, 1)
        composer = AtomicGroupComposer(algorand_client)
        await composer.append_raw(raw)
        raw.amt = 999
        group = await composer.build()
        assert group.transactions[0].amt == 1

    @pytest.mark.unit
    @pytest.mark.asyncio
    async def test_more_than_16_transactions_rejected(self, algorand_client, alice, bob):
        composer = AtomicGroupComposer(algorand_client)
        for amount in range(17):
            await composer.append_raw(_raw_payment(alice, bob, amount))
        with pytest.raises(ValidationError, match="maximum is 16"):
            await composer.build()

    @pytest.mark.unit
    def test_from_intents_empty(self, algorand_client):
        with pytest.raises(ValidationError):
            Group.from_intents([], algorand_client)

    @pytest.mark.unit
    def test_group_is_immutable(self, algorand_client, alice, bob):
        group = Group.from_intents([RawIntent(txn=_raw_payment(alice, bob))], algorand_client)
        with pytest.raises(Exception):
            group.group_id = b"\x00" * 32

    @pytest.mark.unit
    def test_group_is_hashable(self, algorand_client, alice, bob):
        group = Group.from_intents([RawIntent(txn=_raw_payment(alice, bob))], algorand_client)
        signed = group.signed_by([alice])
        assert len({group, signed, group}) == 2


class TestSignedBy:
    """Tests for Group.signed_by()."""

    @pytest.mark.unit
    @pytest.mark.asyncio
    async def test_list_signs_every_position(self, algorand_client, alice, bob):
        group = await _alice_bob_group(algorand_client, alice, bob)
        signed = group.signed_by([alice, bob])
        assert isinstance(signed, SignedGroup)
        assert signed.transaction_count == group.transaction_count == 2
        assert signed.unsigned_indices == ()
        assert all(stx.signature for stx in signed.signed_transactions)
        assert signed.signed_transactions[1].transaction is group.transactions[1]

    @pytest.mark.unit
    @pytest.mark.asyncio
    @pytest.mark.parametrize("count", [0, 1, 3])
    async def test_list_length_mismatch(self, algorand_client, alice, bob, count):
        group = await _alice_bob_group(algorand_client, alice, bob)
        with pytest.raises(ValidationError, match="signer count mismatch"):
            group.signed_by([alice] * count)

    @pytest.mark.unit
    @pytest.mark.asyncio
    async def test_signing_is_deterministic(self, algorand_client, alice, bob):
        group = await _alice_bob_group(algorand_client, alice, bob)
        first = group.signed_by([alice, bob])
        second = group.signed_by([alice, bob])
        assert [s.signature for s in first.signed_transactions] == [s.signature for s in second.signed_transactions]

    @pytest.mark.unit
    @pytest.mark.asyncio
    async def test_sparse_mapping_leaves_gaps_unsigned(self, algorand_client, alice, bob):
        group = await _alice_bob_group(algorand_client, alice, bob)
        signed = group.signed_by({0: alice})
        assert signed.transaction_count == 2
        assert signed.unsigned_indices == (1,)
        assert signed.signed_transactions[0].signature
        assert signed.signed_transactions[1].signature is None

    @pytest.mark.unit
    @pytest.mark.asyncio
    async def test_sparse_mapping_index_out_of_range(self, algorand_client, alice, bob):
        group = await _alice_bob_group(algorand_client, alice, bob)
        with pytest.raises(ValidationError, match="out of range"):
            group.signed_by({0: alice, 2: bob})

    @pytest.mark.unit
    @pytest.mark.asyncio
    async def test_signing_does_not_mutate_group(self, algorand_client, alice, bob):
        group = await _alice_bob_group(algorand_client, alice, bob)
        tx_ids = group.tx_ids
        group.signed_by([alice, bob])
        assert group.tx_ids == tx_ids


class TestSubmit:
    """Tests for SignedGroup.submit() and submit_and_wait()."""

    @pytest.mark.unit
    @pytest.mark.asyncio
    async def test_alice_bob_swap(self, algorand_client, mock_algod_client, alice, bob):
        """Alice→Bob 5, Bob→Alice 3, signed by [Alice, Bob]: one id, two transactions."""
        group = await _alice_bob_group(algorand_client, alice, bob)
        signed = group.signed_by([alice, bob])

        tx_id = await signed.submit()

        assert tx_id == GROUP_TX_ID
        mock_algod_client.send_transactions.assert_called_once()
        sent = mock_algod_client.send_transactions.call_args.args[0]
        assert len(sent) == group.transaction_count == 2
        assert [stx.transaction.amt for stx in sent] == [5, 3]

    @pytest.mark.unit
    @pytest.mark.asyncio
    async def test_sparse_signed_group_rejected_by_node(self, algorand_client, mock_algod_client, alice, bob):
        """Missing signatures surface from the node, not as a local ValidationError."""
        mock_algod_client.send_transactions.side_effect = AlgodHTTPError(
            "TransactionPool.Remember: transaction ABC: signedtxn has no sig", 400
        )
        group = await _alice_bob_group(algorand_client, alice, bob)
        signed = group.signed_by({0: alice})

        with pytest.raises(RejectionError):
            await signed.submit()
        mock_algod_client.send_transactions.assert_called_once()

    @pytest.mark.unit
    @pytest.mark.asyncio
    async def test_submit_network_failure(self, algorand_client, mock_algod_client, alice, bob):
        mock_algod_client.send_transactions.side_effect = OSError("network unreachable")
        group = await _alice_bob_group(algorand_client, alice, bob)
        with pytest.raises(NetworkError):
            await group.signed_by([alice, bob]).submit()

    @pytest.mark.unit
    @pytest.mark.asyncio
    async def test_submit_and_wait_returns_confirmation(self, algorand_client, alice, bob):
        group = await _alice_bob_group(algorand_client, alice, bob)
        result = await group.signed_by([alice, bob]).submit_and_wait(timeout=4)
        assert result.confirmed_round == FIRST_ROUND + 1

    @pytest.mark.unit
    @pytest.mark.asyncio
    async def test_submit_and_wait_times_out(self, algorand_client, mock_algod_client, alice, bob):
        """A group that needs 3 rounds times out with a 1-round budget."""
        blocks_seen = []

        def pending_info(tx_id):
            if len(blocks_seen) >= 3:
                return {"confirmed-round": FIRST_ROUND + 3, "pool-error": ""}
            return {"pool-error": ""}

        mock_algod_client.pending_transaction_info.side_effect = pending_info
        mock_algod_client.status_after_block.side_effect = lambda rnd: blocks_seen.append(rnd)

        group = await _alice_bob_group(algorand_client, alice, bob)
        with pytest.raises(ConfirmationTimeoutError) as exc_info:
            await group.signed_by([alice, bob]).submit_and_wait(timeout=1)

        assert exc_info.value.tx_id == GROUP_TX_ID
        assert exc_info.value.rounds == 1
        assert blocks_seen == [FIRST_ROUND + 1]
