# omsusers

A library that stores and queries the people and the organisation behind an order management system, in an SQLite database. It covers:

- **people** (`omsusers.entities`, `omsusers.people`): users, traders, investors, employees and broker admins
- **access control** (`omsusers.access`, `omsusers.permissions`): roles, permissions, role–permission and user–role mappings, and per-user grants and revocations
- **organisation** (`omsusers.organisation`, `omsusers.branches`, `omsusers.workstations`): broker houses, branches, trader workstations (TWS), trader teams and their members
- **audit logs** (`omsusers.organisation.AuditLog`, `omsusers.branches.AuditLogRepository`)

Records are plain Python dataclasses with keyword-only fields. Each kind of record has a repository class that works on a `omsusers.database.Database`. Deletes are soft deletes: they set `deleted_at` on the record and on the matching rows. Listings leave out deleted rows and return one page at a time, newest first.

## Installation

```
pip install .
```

To run the tests:

```
pip install ".[test]"
pytest
```

## Usage

```python
from omsusers.database import Database, Page
from omsusers.repository import Repository
from omsusers.entities import User, Investor

db = Database(":memory:")
db.create_schema()
repo = Repository(db)

user_id = repo.user().create_investor(
    User(user_name="alice", user_type="investor", email_address="alice@example.com")
)
repo.investor().create_investor(
    Investor(user_id=user_id, client_code="C-001", bo_account_number="BO-EXAMPLE-1")
)

profile = repo.investor().get_investor_by_id(user_id)
print(profile.user_name, profile.client_code)

investors, total = repo.investor().get_investors(page=1, limit=20)
```

`Database(path)` opens (or creates) an SQLite file; the default path is `":memory:"`. `create_schema()` creates every table that does not exist yet. A `Database` can be used as a context manager and closes its connection on exit.

### Paginated listings

`Page` takes a one-based `page_token` and a `page_size`; a `page_size` of 0 means no limit. Each listing returns the records on that page together with the total count of live (not deleted) records:

```python
from omsusers.organisation import Branch

repo.branch().create_branch(Branch(branch_name="Head Office", broker_house_id=1))
branches, total = repo.branch().get_branches(Page(page_token=1, page_size=10))
```

A negative page size, or a page token that gives a negative offset, raises `StoreError`.

### Effective permissions

`UserPermissionRepository.get_user_permissions(user_id)` returns `GrantedPermission` records made of:

- the permissions granted through the user's roles,
- plus the permissions granted to the user directly (mappings that are not deleted),
- minus every permission revoked for that user (`is_revoked=True`).

A permission reached both ways appears once for each way.

```python
granted = repo.map_user_permission().get_user_permissions(user_id)
```

`RolePermissionRepository.get_permissions_by_role(role_id)` lists the permissions mapped to a role, with their names.

### Transactions

`Repository.in_tx(func)` runs `func` inside one transaction and returns its result. The function receives a `Repository` bound to that transaction. If it raises, every change it made is rolled back and the exception propagates. Nested transactions use savepoints. The same is available directly as `with db.transaction(): ...`.

```python
def register(tx):
    uid = tx.user().create_trader(User(user_name="bob", user_type="trader"))
    ...
    return uid

repo.in_tx(register)
```

### Errors

Every storage error derives from `omsusers.database.StoreError`:

- `RecordNotFoundError` is raised when an update of a workstation, a trader–workstation mapping, a team or a team member targets an id that does not exist; when an update of a trader, investor, employee or broker admin finds no row for the `user_id`; and when a joined profile lookup (`get_trader_by_id`, `get_investor_by_id`, `get_employee_by_id`, `get_broker_admin_by_id`) finds nothing.
- `FetchError` is raised when a single-record lookup of a branch, broker house, audit log entry, role, permission or user–role mapping fails or finds no live record.

Updates of branches, broker houses, roles, permissions and the mapping tables other than those named above do not check that the row exists.

### Health checks

```python
repo.health().ping()  # raises StoreError if the database does not answer
```

## What this package does not do

It is a storage library only. It has no network service, no command-line program, no configuration loading and no message-queue integration. The schema is created by `Database.create_schema()`; there are no schema migrations.