"""
Harvest v2 endpoints as data.

Templates use {+baseurl} (filled from client settings) plus resource ids as
reserved expansions, matching Harvest's own URL layout.
"""

from __future__ import annotations

from .models import (
    Client,
    ClientExpenseReport,
    ClientTimeReport,
    CostRate,
    CreateClient,
    CreateCostRate,
    CreateRole,
    CreateTask,
    Expense,
    ExpenseCategoryReport,
    ProjectExpenseReport,
    ProjectTimeReport,
    ResponseEnvelope,
    Role,
    TaskEntry,
    TaskTimeReport,
    TeamExpenseReport,
    TeamTimeReport,
    UpdateClient,
    UpdateRole,
    UpdateTask,
)
from .query import (
    ActiveQueryParameters,
    ExpensesQueryParameters,
    PaginatedQueryParameters,
    ReportsQueryParameters,
    TimeReportsQueryParameters,
)
from .request_builder import Endpoint, Method

# --- Clients ---

LIST_CLIENTS = Endpoint(
    name="clients.list",
    method=Method.GET,
    url_template="{+baseurl}/clients{?is_active,updated_since,page,per_page}",
    query_type=ActiveQueryParameters,
    response_type=ResponseEnvelope[Client],
)
CREATE_CLIENT = Endpoint(
    name="clients.create",
    method=Method.POST,
    url_template="{+baseurl}/clients",
    body_type=CreateClient,
    response_type=Client,
)
GET_CLIENT = Endpoint(
    name="clients.get",
    method=Method.GET,
    url_template="{+baseurl}/clients/{+clientid}",
    response_type=Client,
)
UPDATE_CLIENT = Endpoint(
    name="clients.update",
    method=Method.PATCH,
    url_template="{+baseurl}/clients/{+clientid}",
    body_type=UpdateClient,
    response_type=Client,
)
DELETE_CLIENT = Endpoint(
    name="clients.delete",
    method=Method.DELETE,
    url_template="{+baseurl}/clients/{+clientid}",
)

# --- Roles ---

LIST_ROLES = Endpoint(
    name="roles.list",
    method=Method.GET,
    url_template="{+baseurl}/roles{?page,per_page}",
    query_type=PaginatedQueryParameters,
    response_type=ResponseEnvelope[Role],
)
CREATE_ROLE = Endpoint(
    name="roles.create",
    method=Method.POST,
    url_template="{+baseurl}/roles",
    body_type=CreateRole,
    response_type=Role,
)
GET_ROLE = Endpoint(
    name="roles.get",
    method=Method.GET,
    url_template="{+baseurl}/roles/{+roleid}",
    response_type=Role,
)
UPDATE_ROLE = Endpoint(
    name="roles.update",
    method=Method.PATCH,
    url_template="{+baseurl}/roles/{+roleid}",
    body_type=UpdateRole,
    response_type=Role,
)
DELETE_ROLE = Endpoint(
    name="roles.delete",
    method=Method.DELETE,
    url_template="{+baseurl}/roles/{+roleid}",
)

# --- Tasks ---

LIST_TASKS = Endpoint(
    name="tasks.list",
    method=Method.GET,
    url_template="{+baseurl}/tasks{?is_active,updated_since,page,per_page}",
    query_type=ActiveQueryParameters,
    response_type=ResponseEnvelope[TaskEntry],
)
CREATE_TASK = Endpoint(
    name="tasks.create",
    method=Method.POST,
    url_template="{+baseurl}/tasks",
    body_type=CreateTask,
    response_type=TaskEntry,
)
GET_TASK = Endpoint(
    name="tasks.get",
    method=Method.GET,
    url_template="{+baseurl}/tasks/{+taskid}",
    response_type=TaskEntry,
)
UPDATE_TASK = Endpoint(
    name="tasks.update",
    method=Method.PATCH,
    url_template="{+baseurl}/tasks/{+taskid}",
    body_type=UpdateTask,
    response_type=TaskEntry,
)
DELETE_TASK = Endpoint(
    name="tasks.delete",
    method=Method.DELETE,
    url_template="{+baseurl}/tasks/{+taskid}",
)

# --- User cost rates ---

LIST_USER_COST_RATES = Endpoint(
    name="users.cost_rates.list",
    method=Method.GET,
    url_template="{+baseurl}/users/{+userid}/cost_rates{?page,per_page}",
    query_type=PaginatedQueryParameters,
    response_type=ResponseEnvelope[CostRate],
)
CREATE_USER_COST_RATE = Endpoint(
    name="users.cost_rates.create",
    method=Method.POST,
    url_template="{+baseurl}/users/{+userid}/cost_rates",
    body_type=CreateCostRate,
    response_type=CostRate,
)
GET_USER_COST_RATE = Endpoint(
    name="users.cost_rates.get",
    method=Method.GET,
    url_template="{+baseurl}/users/{+userid}/cost_rates/{+costrateid}",
    response_type=CostRate,
)

# --- Expenses ---

LIST_EXPENSES = Endpoint(
    name="expenses.list",
    method=Method.GET,
    url_template=(
        "{+baseurl}/expenses"
        "{?user_id,client_id,project_id,is_billed,updated_since,from,to,page,per_page}"
    ),
    query_type=ExpensesQueryParameters,
    response_type=ResponseEnvelope[Expense],
)
GET_EXPENSE = Endpoint(
    name="expenses.get",
    method=Method.GET,
    url_template="{+baseurl}/expenses/{+expenseid}",
    response_type=Expense,
)
DELETE_EXPENSE = Endpoint(
    name="expenses.delete",
    method=Method.DELETE,
    url_template="{+baseurl}/expenses/{+expenseid}",
)

# --- Reports ---

_EXPENSE_REPORT_QUERY = "{?from,to,page,per_page}"
_TIME_REPORT_QUERY = "{?from,to,include_fixed_fee,page,per_page}"

CLIENTS_EXPENSE_REPORT = Endpoint(
    name="reports.expenses.clients",
    method=Method.GET,
    url_template="{+baseurl}/reports/expenses/clients" + _EXPENSE_REPORT_QUERY,
    query_type=ReportsQueryParameters,
    response_type=ResponseEnvelope[ClientExpenseReport],
)
PROJECTS_EXPENSE_REPORT = Endpoint(
    name="reports.expenses.projects",
    method=Method.GET,
    url_template="{+baseurl}/reports/expenses/projects" + _EXPENSE_REPORT_QUERY,
    query_type=ReportsQueryParameters,
    response_type=ResponseEnvelope[ProjectExpenseReport],
)
CATEGORIES_EXPENSE_REPORT = Endpoint(
    name="reports.expenses.categories",
    method=Method.GET,
    url_template="{+baseurl}/reports/expenses/categories" + _EXPENSE_REPORT_QUERY,
    query_type=ReportsQueryParameters,
    response_type=ResponseEnvelope[ExpenseCategoryReport],
)
TEAM_EXPENSE_REPORT = Endpoint(
    name="reports.expenses.team",
    method=Method.GET,
    url_template="{+baseurl}/reports/expenses/team" + _EXPENSE_REPORT_QUERY,
    query_type=ReportsQueryParameters,
    response_type=ResponseEnvelope[TeamExpenseReport],
)
CLIENTS_TIME_REPORT = Endpoint(
    name="reports.time.clients",
    method=Method.GET,
    url_template="{+baseurl}/reports/time/clients" + _TIME_REPORT_QUERY,
    query_type=TimeReportsQueryParameters,
    response_type=ResponseEnvelope[ClientTimeReport],
)
PROJECTS_TIME_REPORT = Endpoint(
    name="reports.time.projects",
    method=Method.GET,
    url_template="{+baseurl}/reports/time/projects" + _TIME_REPORT_QUERY,
    query_type=TimeReportsQueryParameters,
    response_type=ResponseEnvelope[ProjectTimeReport],
)
TASKS_TIME_REPORT = Endpoint(
    name="reports.time.tasks",
    method=Method.GET,
    url_template="{+baseurl}/reports/time/tasks" + _TIME_REPORT_QUERY,
    query_type=TimeReportsQueryParameters,
    response_type=ResponseEnvelope[TaskTimeReport],
)
TEAM_TIME_REPORT = Endpoint(
    name="reports.time.team",
    method=Method.GET,
    url_template="{+baseurl}/reports/time/team" + _TIME_REPORT_QUERY,
    query_type=TimeReportsQueryParameters,
    response_type=ResponseEnvelope[TeamTimeReport],
)
