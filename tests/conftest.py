"""Shared fixtures: per-test SQLite database, API clients and factories."""

import os
import tempfile

# Settings are read at import time; point them at SQLite before the app loads
os.environ.setdefault(
    "DB_URL", f"sqlite+aiosqlite:///{os.path.join(tempfile.gettempdir(), 'taskdesk-test.db')}"
)
os.environ.setdefault("APP_ENV", "development")

import httpx  # noqa: E402
import pytest  # noqa: E402
from sqlalchemy import event, select  # noqa: E402
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine  # noqa: E402

from taskdesk.db import get_db  # noqa: E402
from taskdesk.main import app  # noqa: E402
from taskdesk.models import (  # noqa: E402
    Base,
    PermissionKey,
    Project,
    Task,
    TaskStatus,
    User,
    UserPermission,
    UserRole,
)
from taskdesk.services.auth import auth_service  # noqa: E402

BASE_URL = "http://testserver"


@pytest.fixture
async def engine(tmp_path):
    engine = create_async_engine(f"sqlite+aiosqlite:///{tmp_path / 'test.db'}")

    @event.listens_for(engine.sync_engine, "connect")
    def enable_foreign_keys(dbapi_connection, connection_record):
        cursor = dbapi_connection.cursor()
        cursor.execute("PRAGMA foreign_keys=ON")
        cursor.close()

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    yield engine

    await engine.dispose()


@pytest.fixture
def session_maker(engine):
    return async_sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)


@pytest.fixture(autouse=True)
def override_db(session_maker):
    async def get_test_db():
        async with session_maker() as session:
            try:
                yield session
                await session.commit()
            except Exception:
                await session.rollback()
                raise

    app.dependency_overrides[get_db] = get_test_db
    yield
    app.dependency_overrides.pop(get_db, None)


@pytest.fixture
def make_user(session_maker):
    async def make_user(
        email: str,
        role: UserRole = UserRole.STAFF,
        permissions: tuple[PermissionKey, ...] = (),
        is_active: bool = True,
        password: str | None = None,
    ) -> User:
        hashed = auth_service.hash_password(password) if password else "not-a-real-hash"
        async with session_maker() as session:
            user = User(
                email=email,
                hashed_password=hashed,
                full_name=email.split("@")[0].title(),
                role=role,
                is_active=is_active,
                permissions=[UserPermission(key=key) for key in permissions],
            )
            session.add(user)
            await session.commit()
            return user

    return make_user


@pytest.fixture
async def admin(make_user) -> User:
    return await make_user("admin@example.com", role=UserRole.ADMIN)


@pytest.fixture
async def viewer(make_user) -> User:
    """Staff member who may see tasks but not change them."""
    return await make_user(
        "viewer@example.com",
        permissions=(PermissionKey.TASK_VIEW, PermissionKey.PROJECT_VIEW),
    )


@pytest.fixture
def make_client():
    def make_client(user: User | None = None, **kwargs) -> httpx.AsyncClient:
        cookies = dict(kwargs.pop("cookies", {}))
        if user:
            cookies["access_token"] = auth_service.create_access_token(user.id)
        return httpx.AsyncClient(
            transport=httpx.ASGITransport(app=app),
            base_url=BASE_URL,
            cookies=cookies,
            **kwargs,
        )

    return make_client


@pytest.fixture
async def admin_client(admin, make_client):
    async with make_client(admin) as client:
        yield client


@pytest.fixture
async def anonymous_client(make_client):
    async with make_client() as client:
        yield client


@pytest.fixture
def make_project(session_maker):
    async def make_project(name_en: str = "Website", name_ar: str = "الموقع") -> Project:
        async with session_maker() as session:
            project = Project(name_en=name_en, name_ar=name_ar)
            session.add(project)
            await session.commit()
            return project

    return make_project


@pytest.fixture
def make_tasks(session_maker):
    async def make_tasks(project: Project, *titles: str, status: TaskStatus | None = None) -> list[Task]:
        async with session_maker() as session:
            tasks = [
                Task(
                    project_id=project.id,
                    title=title,
                    order=index,
                    status_id=status.id if status else None,
                )
                for index, title in enumerate(titles)
            ]
            session.add_all(tasks)
            await session.commit()
            return tasks

    return make_tasks


@pytest.fixture
def make_status(session_maker):
    async def make_status(name_en: str = "Open", name_ar: str = "مفتوحة") -> TaskStatus:
        async with session_maker() as session:
            task_status = TaskStatus(name_en=name_en, name_ar=name_ar, color="#22c55e")
            session.add(task_status)
            await session.commit()
            return task_status

    return make_status


@pytest.fixture
def task_orders(session_maker):
    """Read back {title: order} for a project's tasks."""

    async def task_orders(project: Project) -> dict[str, int]:
        async with session_maker() as session:
            result = await session.execute(select(Task).where(Task.project_id == project.id))
            return {task.title: task.order for task in result.scalars().all()}

    return task_orders


@pytest.fixture
def order_version(session_maker):
    async def order_version(project: Project) -> int:
        async with session_maker() as session:
            result = await session.execute(
                select(Project.tasks_order_version).where(Project.id == project.id)
            )
            return result.scalar_one()

    return order_version
