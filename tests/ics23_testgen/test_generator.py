"""End-to-end fixture generation against the reference backend."""

from __future__ import annotations

import pytest

from ics23_testgen.fixture import Fixture
from ics23_testgen.generator import generate_fixture
from ics23_testgen.ics23 import CommitmentProof
from ics23_testgen.selection import Mode, Position
from ics23_testgen.types import ArgumentError, CollaboratorError, EncodingError, SelectionError
from ics23_testgen.universe import Universe, sorted_keys
from tests.ics23_testgen.helpers import (
    FailingProof,
    FakeBackend,
    calculate_existence_root,
    check_non_existence,
)
from tests.ics23_testgen.helpers.mocks import FAKE_ROOT

# Known-answer output of `testgen exist left 400`. Other implementations of
# the generator must print these exact bytes.
EXIST_LEFT_400_JSON = (
    "{\n"
    '  "root": "02e1f132436e08f5ca381ba4505699ebc4cfd43429b46d7a30a328d4575a32fc",\n'
    '  "key": "41454255416f634c6b5766676b43505a6b585155",\n'
    '  "value": "6864567949654f465362676a4d46686b4f677147",\n'
    '  "proof": "'
    "0aa8030a1441454255416f634c6b5766676b43505a6b58515512146864567949"
    "654f465362676a4d46686b4f6771471a090801180120012a0100222708011201"
    "011a205a0d68c1f6a0d896d5b2c38d3f4910f987d43bcc84503af6e51e0dc586"
    "f458a6222708011201011a20933de6c1d7ef2610b44918b5d856959f2e08e9e9"
    "6a9c381a6853387e5554d88c222708011201011a209ca34c5f1dc1a0696e9945"
    "49940bf288f7668521d21c73110ccf699fb174e392222708011201011a208f3f"
    "e05349f837e9ccf7a65e92166b9d8a30c15df269834b652baca226fbf0d32227"
    "08011201011a20bb76c5b3825f39404a30e16a8e4629fa7891c9162f5c5082e5"
    "ab21bde6455053222708011201011a20daae73a90eeffc9e1df0e0f0271a92c7"
    "90e15add28a7c107863a7465ddeac963222708011201011a20d7627e0758d2c8"
    "edfd60102ce739e2af9aab7ca83273935a89214a9208d821fd22270801120101"
    "1a20c17415fc78f59ead4bf0ee554c8f511cda5006b7fb40ed5df3e020660a33"
    "05d5222708011201011a2081abb80d4b34bc325bf85342c4987d5cd18fcf4785"
    "53b4a212ca78426375de63"
    '"\n'
    "}\n"
)


def _decode(fixture: Fixture) -> CommitmentProof:
    return CommitmentProof.decode(fixture.proof)


class TestScenarios:
    """The documented scenarios over the deterministic universe."""

    def test_exist_left_known_answer(self) -> None:
        """The default-size membership fixture matches its published bytes exactly."""
        fixture = generate_fixture(Mode.EXIST, Position.LEFT, 400)

        assert fixture.to_json() == EXIST_LEFT_400_JSON
        assert fixture.key == b"AEBUAocLkWfgkCPZkXQU"
        assert fixture.value == b"hdVyIeOFSbgjMFhkOgqG"

    def test_exist_left(self, universe_400: Universe, index_400: tuple[bytes, ...]) -> None:
        """The first key of the index, its value, and a membership proof to the root."""
        fixture = generate_fixture(Mode.EXIST, Position.LEFT, 400)
        proof = _decode(fixture)

        assert fixture.key == index_400[0]
        assert fixture.value == universe_400[index_400[0]]
        assert proof.exist is not None
        assert proof.exist.key == fixture.key
        assert calculate_existence_root(proof.exist) == fixture.root

    def test_nonexist_right(self, universe_400: Universe, index_400: tuple[bytes, ...]) -> None:
        """A key above the last one, an empty value, and a left-only non-membership proof."""
        fixture = generate_fixture(Mode.NONEXIST, Position.RIGHT, 400)
        proof = _decode(fixture)

        assert fixture.key > index_400[-1]
        assert fixture.value == b""
        assert proof.nonexist is not None
        assert proof.nonexist.right is None
        check_non_existence(proof.nonexist, fixture.root, index_400, universe_400)

    def test_nonexist_middle_10(self, universe_factory) -> None:
        """A key strictly inside one of the 9 gaps of the size-10 index."""
        universe = universe_factory(10)
        index = sorted_keys(universe)

        fixture = generate_fixture(Mode.NONEXIST, Position.MIDDLE, 10)
        proof = _decode(fixture)

        assert fixture.key not in universe
        assert any(lo < fixture.key < hi for lo, hi in zip(index, index[1:]))
        assert proof.nonexist is not None
        assert proof.nonexist.left is not None
        assert proof.nonexist.right is not None
        check_non_existence(proof.nonexist, fixture.root, index, universe)

    def test_exist_middle_3(self, universe_factory) -> None:
        """Three keys is enough for an interior member."""
        index = sorted_keys(universe_factory(3))

        fixture = generate_fixture(Mode.EXIST, Position.MIDDLE, 3)

        assert fixture.key == index[1]

    def test_exist_middle_2_fails(self) -> None:
        """Two keys have no interior member."""
        with pytest.raises(SelectionError, match="insufficient data"):
            generate_fixture(Mode.EXIST, Position.MIDDLE, 2)

    def test_default_size(self) -> None:
        """Omitting the size is the same as asking for 400."""
        assert generate_fixture(Mode.NONEXIST, Position.LEFT) == generate_fixture(
            Mode.NONEXIST, Position.LEFT, 400
        )


class TestProperties:
    """Properties holding for every scenario."""

    @pytest.mark.parametrize("mode", list(Mode))
    @pytest.mark.parametrize("position", list(Position))
    def test_deterministic(self, mode: Mode, position: Position) -> None:
        """Same arguments, byte-identical fixture."""
        assert generate_fixture(mode, position, 50).to_json() == generate_fixture(
            mode, position, 50
        ).to_json()

    @pytest.mark.parametrize("mode", list(Mode))
    @pytest.mark.parametrize("position", list(Position))
    def test_value_empty_iff_nonexist(self, mode: Mode, position: Position) -> None:
        """Members always carry a non-empty value."""
        fixture = generate_fixture(mode, position, 25)

        assert (fixture.value == b"") == (not mode.exists)

    @pytest.mark.parametrize("size", [1, 2, 5, 64, 65, 257])
    @pytest.mark.parametrize("position", [Position.LEFT, Position.RIGHT])
    def test_edges_across_sizes(self, universe_factory, size: int, position: Position) -> None:
        """Edge proofs are sound for power-of-two and ragged trees alike."""
        universe = universe_factory(size)
        index = sorted_keys(universe)

        member = _decode(generate_fixture(Mode.EXIST, position, size))
        absent = generate_fixture(Mode.NONEXIST, position, size)

        assert member.exist is not None
        assert calculate_existence_root(member.exist) == absent.root
        nonexist = _decode(absent).nonexist
        assert nonexist is not None
        check_non_existence(nonexist, absent.root, index, universe)

    def test_round_trip(self) -> None:
        """Parsing the JSON text recovers the exact fixture bytes."""
        fixture = generate_fixture(Mode.EXIST, Position.RIGHT, 30)

        assert Fixture.from_json(fixture.to_json()) == fixture


class TestFailures:
    """Errors propagate out of the pipeline unchanged."""

    def test_bad_size(self) -> None:
        """Non-positive sizes never reach the backend."""
        backend = FakeBackend()

        with pytest.raises(ArgumentError):
            generate_fixture(Mode.EXIST, Position.LEFT, 0, backend=backend)

        assert backend.calls == []

    def test_fake_backend(self) -> None:
        """The pipeline runs against any backend."""
        fixture = generate_fixture(Mode.EXIST, Position.LEFT, 10, backend=FakeBackend())

        assert fixture.root == FAKE_ROOT
        assert fixture.proof.startswith(b"member:")

    def test_backend_failure(self) -> None:
        """Backend failures surface as collaborator errors."""
        backend = FakeBackend(fail_on="create_non_membership_proof")

        with pytest.raises(CollaboratorError, match="create non-membership proof failed"):
            generate_fixture(Mode.NONEXIST, Position.MIDDLE, 10, backend=backend)

    def test_encoding_failure(self) -> None:
        """Serialization failures surface as encoding errors."""
        backend = FakeBackend(proof=FailingProof())

        with pytest.raises(EncodingError, match="marshal exploded"):
            generate_fixture(Mode.EXIST, Position.RIGHT, 10, backend=backend)
