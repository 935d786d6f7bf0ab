"""Unit tests for testing utilities."""

from keywire.application import Container
from keywire.domain import Lifetime
from keywire.infrastructure.testing import TestContainer, create_mock_container


class Database:
    pass


class UserService:
    def __init__(self, db: Database):
        self.db = db


class TestTestContainerInitialization:
    """Test cases for TestContainer initialization."""

    def test_without_parent(self):
        """Test TestContainer can be initialized without parent container."""
        test_container = TestContainer()

        assert isinstance(test_container, Container)
        assert test_container._parent_container is None
        assert test_container.overrides == {}

    def test_inherits_parent_registrations(self):
        """Test that parent definitions are visible."""
        parent = Container()
        parent.add("db", Database)

        test_container = TestContainer(parent)

        assert isinstance(test_container.get("db"), Database)

    def test_config_applied_over_parent(self):
        """Test that config definitions are merged on top of the parent registry."""
        parent = Container()
        parent.add("db", Database)
        parent.add("service", UserService).with_argument("db")

        test_container = TestContainer(parent, config={"service": f"{__name__}.Database"})

        assert isinstance(test_container.get("db"), Database)
        assert isinstance(test_container.get("service"), Database)
        assert isinstance(parent.get("service"), UserService)


class TestOverride:
    """Test cases for override."""

    def test_override_returns_instance(self):
        """Test that overridden keys return the given object."""
        mock_db = object()
        test_container = TestContainer()

        test_container.override(Database, mock_db)

        assert test_container.get(Database) is mock_db
        assert test_container.get(UserService).db is mock_db

    def test_override_does_not_touch_parent(self):
        """Test that overrides are local to the test container."""
        parent = Container()
        parent.add("db", Database)
        test_container = TestContainer(parent)

        test_container.override("db", "mock")

        assert test_container.get("db") == "mock"
        assert isinstance(parent.get("db"), Database)

    def test_override_replaces_shared_instance(self):
        """Test that overriding drops an already built shared instance."""
        test_container = TestContainer()
        test_container.share("db", Database)
        test_container.get("db")

        test_container.override("db", "mock")

        assert test_container.get("db") == "mock"
        assert test_container.get_definition("db").lifetime == Lifetime.TRANSIENT

    def test_overrides_property(self):
        """Test that overrides are reported by canonical key."""
        test_container = TestContainer()

        test_container.override(Database, "mock")

        assert test_container.overrides == {f"{__name__}.Database": "mock"}


class TestResetOverrides:
    """Test cases for reset_overrides."""

    def test_restores_parent_registrations(self):
        """Test that reset brings back the parent definitions."""
        parent = Container()
        parent.add("db", Database)
        test_container = TestContainer(parent)
        test_container.override("db", "mock")

        test_container.reset_overrides()

        assert test_container.overrides == {}
        assert isinstance(test_container.get("db"), Database)

    def test_restores_config_registrations(self):
        """Test that reset keeps definitions from the config mapping."""
        parent = Container()
        parent.add("db", Database)
        test_container = TestContainer(
            parent, config={"service": {"class": f"{__name__}.UserService", "arguments": ["db"]}}
        )
        test_container.override("service", "mock")

        test_container.reset_overrides()

        assert set(test_container.get_registry_copy()) == {"db", "service"}
        assert isinstance(test_container.get("service").db, Database)

    def test_without_parent_clears_registry(self):
        """Test that reset empties a parentless container."""
        test_container = TestContainer()
        test_container.override("db", "mock")

        test_container.reset_overrides()

        assert test_container.get_registry_copy() == {}

    def test_context_manager(self):
        """Test that leaving the context resets overrides."""
        parent = Container()
        parent.add("db", Database)

        with TestContainer(parent) as test_container:
            test_container.override("db", "mock")
            assert test_container.get("db") == "mock"

        assert isinstance(test_container.get("db"), Database)


class TestCreateMockContainer:
    """Test cases for create_mock_container."""

    def test_creates_overrides(self):
        """Test that all given pairs are overridden."""
        mock_db = object()

        test_container = create_mock_container((Database, mock_db), ("mailer", "mock-mailer"))

        assert test_container.get(UserService).db is mock_db
        assert test_container.get("mailer") == "mock-mailer"
