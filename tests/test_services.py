"""Tests for service layer."""

import jwt
import pytest

from autolog.config import get_settings
from autolog.models import AttachmentTarget, Garage
from autolog.services.account_service import (
    AccountService,
    TokenError,
    decode_token,
    encode_token,
)
from autolog.services.attachment_service import (
    AttachmentService,
    InvalidTargetError,
    TargetNotFoundError,
    parse_target,
)


async def make_attachment(service, profile_id, key="abc123.photo.png"):
    return await service.create(
        original_name="photo.png",
        encoding="7bit",
        mime_type="image/png",
        url=f"https://s3.test/bucket/{key}",
        aws_key=key,
        profile_id=profile_id,
    )


class TestAccountService:
    """Tests for AccountService."""

    @pytest.mark.asyncio
    async def test_create_account_with_profile(self, test_session):
        service = AccountService(test_session)
        account = await service.create("alice", first_name="Alice", last_name="Ng")

        assert account.id is not None
        assert account.token_seed
        assert account.profile is not None
        assert account.profile.account_id == account.id
        assert account.profile.first_name == "Alice"

    @pytest.mark.asyncio
    async def test_get_by_username(self, test_session):
        service = AccountService(test_session)
        created = await service.create("bob")

        found = await service.get_by_username("bob")
        assert found is not None
        assert found.id == created.id
        assert await service.get_by_username("nobody") is None

    @pytest.mark.asyncio
    async def test_issue_and_authenticate(self, test_session):
        service = AccountService(test_session)
        account = await service.create("carol")
        token = await service.issue_token(account)

        authenticated = await service.authenticate(token)
        assert authenticated.id == account.id
        assert authenticated.profile.id == account.profile.id

    @pytest.mark.asyncio
    async def test_issuing_rotates_previous_token(self, test_session):
        service = AccountService(test_session)
        account = await service.create("dave")
        old_token = await service.issue_token(account)
        new_token = await service.issue_token(account)

        assert old_token != new_token
        with pytest.raises(TokenError):
            await service.authenticate(old_token)
        assert (await service.authenticate(new_token)).id == account.id


class TestTokens:
    """Tests for token encoding and decoding."""

    def test_round_trip(self):
        assert decode_token(encode_token("seed-1")) == "seed-1"

    def test_wrong_secret(self):
        token = jwt.encode({"tokenSeed": "seed-1"}, "some-other-secret-that-is-long-enough", algorithm="HS256")
        with pytest.raises(TokenError):
            decode_token(token)

    def test_missing_seed_claim(self):
        token = jwt.encode({"sub": "someone"}, get_settings().jwt_secret, algorithm="HS256")
        with pytest.raises(TokenError, match="tokenSeed"):
            decode_token(token)

    def test_not_a_token(self):
        with pytest.raises(TokenError):
            decode_token("definitely.not.valid")


class TestAttachmentService:
    """Tests for AttachmentService."""

    @pytest.fixture
    async def profile_id(self, test_session):
        account = await AccountService(test_session).create("owner")
        return account.profile.id

    @pytest.mark.asyncio
    async def test_create_and_get(self, test_session, profile_id):
        service = AttachmentService(test_session)
        attachment = await make_attachment(service, profile_id)

        found = await service.get_by_id(attachment.id)
        assert found is not None
        assert found.aws_key == "abc123.photo.png"
        assert found.profile_id == profile_id
        assert found.created_at is not None

    @pytest.mark.asyncio
    async def test_get_missing(self, test_session):
        service = AttachmentService(test_session)
        assert await service.get_by_id("nonexistent") is None

    @pytest.mark.asyncio
    async def test_attach_to_garage(self, test_session, profile_id):
        garage = Garage(name="Shop", profile_id=profile_id)
        test_session.add(garage)
        await test_session.flush()

        service = AttachmentService(test_session)
        attachment = await make_attachment(service, profile_id)
        entity = await service.attach(attachment, AttachmentTarget.GARAGE, garage.id)

        assert entity is garage
        assert await service.get_attachment_ids_for(AttachmentTarget.GARAGE, garage.id) == [
            attachment.id
        ]

    @pytest.mark.asyncio
    async def test_attach_accepts_model_name(self, test_session, profile_id):
        service = AttachmentService(test_session)
        attachment = await make_attachment(service, profile_id)
        await service.attach(attachment, "profile", profile_id)

        assert await service.get_attachment_ids_for(AttachmentTarget.PROFILE, profile_id) == [
            attachment.id
        ]

    @pytest.mark.asyncio
    async def test_attach_missing_target(self, test_session, profile_id):
        service = AttachmentService(test_session)
        attachment = await make_attachment(service, profile_id)

        with pytest.raises(TargetNotFoundError):
            await service.attach(attachment, AttachmentTarget.VEHICLE, "no-such-vehicle")

    @pytest.mark.asyncio
    async def test_attach_invalid_kind(self, test_session, profile_id):
        service = AttachmentService(test_session)
        attachment = await make_attachment(service, profile_id)

        with pytest.raises(InvalidTargetError):
            await service.attach(attachment, "boat", profile_id)


class TestParseTarget:
    """Tests for model name parsing."""

    @pytest.mark.parametrize(
        "value,expected",
        [
            ("profile", AttachmentTarget.PROFILE),
            ("garage", AttachmentTarget.GARAGE),
            ("vehicle", AttachmentTarget.VEHICLE),
            ("maintenance-log", AttachmentTarget.MAINTENANCE_LOG),
        ],
    )
    def test_known_models(self, value, expected):
        assert parse_target(value) is expected

    @pytest.mark.parametrize("value", ["", "Vehicle", "maintenance_log", "account"])
    def test_unknown_models(self, value):
        with pytest.raises(InvalidTargetError):
            parse_target(value)
