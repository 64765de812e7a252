"""Tool definitions advertised to MCP clients.

Linear priority values: 0=No priority, 1=Urgent, 2=High, 3=Medium, 4=Low.
"""

from typing import List

from mcp import types

_PAGE_SIZE = {
    "type": "integer",
    "default": 50,
    "description": "Number of items to return (default: 50, max: 100)",
}

_AFTER = {
    "type": "string",
    "description": "Cursor for pagination. Use the endCursor from a previous response to fetch the next page",
}

_SEARCH_DESCRIPTION = """Search for Linear issues using a query string and advanced filters.

Examples:
1. Basic search: {query: "bug"}
2. High priority issues: {query: "", filter: {priority: {gte: 2}}}
3. Issues with specific labels: {query: "", filter: {labels: {name: {in: ["Bug", "Critical"]}}}}
4. Complex filters: {query: "", filter: {and: [{priority: {gte: 2}}, {state: {type: {eq: "started"}}}], or: [{assignee: {id: {eq: "me"}}}, {creator: {id: {eq: "me"}}}]}}
5. Issues in a project: {query: "", filter: {project: {id: {eq: "project-id"}}}}
6. Issues in the current cycle: {query: "", filter: {cycle: {type: "current", teamId: "team-123"}}}
7. Issues in a cycle by number: {query: "", filter: {cycle: {type: "specific", id: "2", teamId: "team-123"}}}
8. Issues in a cycle by id: {query: "", filter: {cycle: {type: "specific", id: "cycle-456"}}}

Supported comparators:
- String fields: eq, neq, in, nin, contains, startsWith, endsWith (plus case-insensitive variants)
- Number fields: eq, neq, lt, lte, gt, gte, in, nin
- Date fields: eq, neq, lt, lte, gt, gte (supports ISO 8601 durations like "P2W")

Filterable relationships: assignee, creator, team, state, labels, project, cycle.
Logical operators: and, or (arrays of filters).

Shortcuts:
- assignedTo: "me" or user ID (assignee.id.eq)
- createdBy: "me" or user ID (creator.id.eq)
- projectId: project ID (project.id.eq)
- projectName: project name lookup (must match exactly one project)"""


TOOLS: List[types.Tool] = [
    # 1. create_issue
    types.Tool(
        name="create_issue",
        description=(
            "Create a new Linear issue with optional parent linking. "
            'Supports self-assignment using "me" as assigneeId.'
        ),
        inputSchema={
            "type": "object",
            "properties": {
                "teamId": {
                    "type": "string",
                    "description": "ID of the team to create the issue in. Required unless parentId is provided.",
                },
                "title": {
                    "type": "string",
                    "description": "Title of the issue",
                },
                "description": {
                    "type": "string",
                    "description": "Description of the issue (markdown supported)",
                },
                "parentId": {
                    "type": "string",
                    "description": "ID of the parent issue. If provided, creates a sub-issue in the parent's team.",
                },
                "status": {
                    "type": "string",
                    "description": "Workflow state name of the issue (e.g. \"Todo\")",
                },
                "priority": {
                    "type": "integer",
                    "minimum": 0,
                    "maximum": 4,
                    "description": "Priority of the issue (0=None, 1=Urgent, 2=High, 3=Medium, 4=Low)",
                },
                "assigneeId": {
                    "type": "string",
                    "description": 'ID of the user to assign the issue to, or "me" for the authenticated user',
                },
                "labelIds": {
                    "type": "array",
                    "items": {"type": "string"},
                    "description": "Label IDs to attach to the issue",
                },
                "projectId": {
                    "type": "string",
                    "description": "ID of the project to add the issue to",
                },
            },
            "required": ["title"],
        },
    ),
    # 2. update_issue
    types.Tool(
        name="update_issue",
        description=(
            "Update an existing Linear issue. Supports self-assignment using \"me\" "
            "as assigneeId and cycle assignment via cycleId: a cycle number (e.g. \"2\"), "
            "a relative cycle (\"current\", \"next\", \"previous\") or a cycle ID."
        ),
        inputSchema={
            "type": "object",
            "properties": {
                "issueId": {
                    "type": "string",
                    "description": "ID or key of the issue to update",
                },
                "title": {
                    "type": "string",
                    "description": "New title for the issue",
                },
                "description": {
                    "type": "string",
                    "description": "New description for the issue (markdown supported)",
                },
                "status": {
                    "type": "string",
                    "description": "New status name (e.g. \"Todo\", \"In Progress\"). Must be valid for the issue's team.",
                },
                "priority": {
                    "type": "integer",
                    "description": "New priority (0=None, 1=Urgent, 2=High, 3=Medium, 4=Low)",
                },
                "assigneeId": {
                    "type": "string",
                    "description": 'ID of the new assignee, or "me" for the authenticated user',
                },
                "labelIds": {
                    "type": "array",
                    "items": {"type": "string"},
                    "description": "New array of label IDs",
                },
                "cycleId": {
                    "type": "string",
                    "description": "Cycle number, current/next/previous, or cycle ID",
                },
            },
            "required": ["issueId"],
        },
    ),
    # 3. get_issue
    types.Tool(
        name="get_issue",
        description=(
            "Get detailed information about a specific Linear issue including "
            "relationships, mentions and cleaned content"
        ),
        inputSchema={
            "type": "object",
            "properties": {
                "issueId": {
                    "type": "string",
                    "description": "The ID or key of the Linear issue",
                },
                "includeRelationships": {
                    "type": "boolean",
                    "default": False,
                    "description": "Include comments and extract mentions from them",
                },
            },
            "required": ["issueId"],
        },
    ),
    # 4. search_issues
    types.Tool(
        name="search_issues",
        description=_SEARCH_DESCRIPTION,
        inputSchema={
            "type": "object",
            "properties": {
                "query": {
                    "type": "string",
                    "description": "Text to search in titles and descriptions. May be empty when only filters are used.",
                },
                "includeRelationships": {
                    "type": "boolean",
                    "default": False,
                    "description": "Accepted for compatibility and ignored: search results never include relationships or comments. Use get_issue for those.",
                },
                "filter": {
                    "type": "object",
                    "description": "Linear issue filter. See the tool description for examples.",
                },
                "projectId": {
                    "type": "string",
                    "description": "Filter by project ID. Takes precedence over projectName.",
                },
                "projectName": {
                    "type": "string",
                    "description": "Filter by project name when projectId is not given",
                },
            },
            "required": ["query"],
        },
    ),
    # 5. get_teams
    types.Tool(
        name="get_teams",
        description="Get a list of Linear teams with optional name/key filtering",
        inputSchema={
            "type": "object",
            "properties": {
                "nameFilter": {
                    "type": "string",
                    "description": "Case-insensitive filter on team name or key",
                },
            },
        },
    ),
    # 6. create_comment
    types.Tool(
        name="create_comment",
        description="Create a new comment on a Linear issue",
        inputSchema={
            "type": "object",
            "properties": {
                "issueId": {
                    "type": "string",
                    "description": "ID or key of the issue to comment on",
                },
                "body": {
                    "type": "string",
                    "description": "Content of the comment (markdown supported)",
                },
            },
            "required": ["issueId", "body"],
        },
    ),
    # 7. delete_issue
    types.Tool(
        name="delete_issue",
        description="Delete an existing Linear issue",
        inputSchema={
            "type": "object",
            "properties": {
                "issueId": {
                    "type": "string",
                    "description": "ID or key of the issue to delete",
                },
            },
            "required": ["issueId"],
        },
    ),
    # 8. get_projects
    types.Tool(
        name="get_projects",
        description="Get a list of Linear projects with optional name filtering and pagination",
        inputSchema={
            "type": "object",
            "properties": {
                "nameFilter": {
                    "type": "string",
                    "description": "Filter by project name",
                },
                "includeArchived": {
                    "type": "boolean",
                    "default": True,
                    "description": "Whether to include archived projects (default: true)",
                },
                "first": _PAGE_SIZE,
                "after": _AFTER,
            },
        },
    ),
    # 9. get_project_updates
    types.Tool(
        name="get_project_updates",
        description="Get project updates for a given project ID with optional filtering parameters",
        inputSchema={
            "type": "object",
            "properties": {
                "projectId": {
                    "type": "string",
                    "description": "ID of the project to get updates for",
                },
                "includeArchived": {
                    "type": "boolean",
                    "default": True,
                    "description": "Whether to include archived updates (default: true)",
                },
                "first": _PAGE_SIZE,
                "after": _AFTER,
                "createdAfter": {
                    "type": "string",
                    "description": "ISO date. Only return updates created at or after this date",
                },
                "createdBefore": {
                    "type": "string",
                    "description": "ISO date. Only return updates created at or before this date",
                },
                "userId": {
                    "type": "string",
                    "description": 'Filter by author. Use "me" for the authenticated user',
                },
                "health": {
                    "type": "string",
                    "description": 'Filter by health ("onTrack", "atRisk", "offTrack")',
                },
            },
            "required": ["projectId"],
        },
    ),
    # 10. create_project_update
    types.Tool(
        name="create_project_update",
        description="Create a new update for a Linear project",
        inputSchema={
            "type": "object",
            "properties": {
                "projectId": {
                    "type": "string",
                    "description": "ID of the project to create an update for",
                },
                "body": {
                    "type": "string",
                    "description": "Content of the update in markdown format",
                },
                "health": {
                    "type": "string",
                    "enum": ["onTrack", "atRisk", "offTrack"],
                    "description": "Health of the project at the time of the update",
                },
                "isDiffHidden": {
                    "type": "boolean",
                    "description": "Whether to hide the diff against the previous update",
                },
            },
            "required": ["projectId"],
        },
    ),
    # 11. get_documents
    types.Tool(
        name="get_documents",
        description=(
            "Get a list of Linear documents with optional title, team and project "
            "filters and pagination. Results carry a cleaned content preview."
        ),
        inputSchema={
            "type": "object",
            "properties": {
                "nameFilter": {
                    "type": "string",
                    "description": "Filter by document title",
                },
                "includeArchived": {
                    "type": "boolean",
                    "default": True,
                    "description": "Whether to include archived documents (default: true)",
                },
                "teamId": {
                    "type": "string",
                    "description": "Filter documents by team ID",
                },
                "projectId": {
                    "type": "string",
                    "description": "Filter documents by project ID",
                },
                "first": _PAGE_SIZE,
                "after": _AFTER,
            },
        },
    ),
    # 12. get_document
    types.Tool(
        name="get_document",
        description="Get a Linear document with its content, authors, team and project",
        inputSchema={
            "type": "object",
            "properties": {
                "documentId": {
                    "type": "string",
                    "description": "The ID of the Linear document",
                },
                "documentSlug": {
                    "type": "string",
                    "description": "The URL slug of the document (not supported yet)",
                },
                "includeFull": {
                    "type": "boolean",
                    "default": True,
                    "description": "Return full content instead of a preview (default: true)",
                },
            },
        },
    ),
    # 13. create_document
    types.Tool(
        name="create_document",
        description="Create a new document in Linear",
        inputSchema={
            "type": "object",
            "properties": {
                "teamId": {
                    "type": "string",
                    "description": "ID of the team this document belongs to",
                },
                "title": {
                    "type": "string",
                    "description": "Title of the document",
                },
                "content": {
                    "type": "string",
                    "description": "Content of the document in markdown format",
                },
                "icon": {
                    "type": "string",
                    "description": "Emoji icon for the document",
                },
                "projectId": {
                    "type": "string",
                    "description": "ID of the project to associate this document with",
                },
                "isPublic": {
                    "type": "boolean",
                    "default": False,
                    "description": "Whether the document is accessible outside the organization",
                },
            },
            "required": ["teamId", "title"],
        },
    ),
    # 14. update_document
    types.Tool(
        name="update_document",
        description="Update an existing Linear document. Only the given fields change.",
        inputSchema={
            "type": "object",
            "properties": {
                "documentId": {
                    "type": "string",
                    "description": "ID of the document to update",
                },
                "title": {
                    "type": "string",
                    "description": "New title",
                },
                "content": {
                    "type": "string",
                    "description": "New content in markdown format",
                },
                "icon": {
                    "type": "string",
                    "description": "New emoji icon",
                },
                "projectId": {
                    "type": "string",
                    "description": "ID of the project to move this document to",
                },
                "teamId": {
                    "type": "string",
                    "description": "ID of the team to move this document to",
                },
                "isArchived": {
                    "type": "boolean",
                    "description": "Whether the document should be archived",
                },
                "isPublic": {
                    "type": "boolean",
                    "description": "Whether the document is accessible outside the organization",
                },
            },
            "required": ["documentId"],
        },
    ),
    # 15. delete_document
    types.Tool(
        name="delete_document",
        description="Permanently delete a Linear document",
        inputSchema={
            "type": "object",
            "properties": {
                "documentId": {
                    "type": "string",
                    "description": "ID of the document to delete",
                },
            },
            "required": ["documentId"],
        },
    ),
]

TOOL_NAMES = [tool.name for tool in TOOLS]
