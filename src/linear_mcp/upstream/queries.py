"""GraphQL documents for the Linear API.

Kept together so they are easy to audit against the public schema at
https://studio.apollographql.com/public/Linear-API.
"""

# ---------------------------------------------------------------------------
# Shared selections
# ---------------------------------------------------------------------------

_USER_FIELDS = "id name displayName email avatarUrl"

_ISSUE_FIELDS = f"""
    id
    identifier
    title
    description
    priority
    estimate
    dueDate
    url
    createdAt
    updatedAt
    state {{ id name type color }}
    assignee {{ {_USER_FIELDS} }}
    creator {{ {_USER_FIELDS} }}
    team {{ id name key description }}
    parent {{ id identifier title }}
"""

_PAGE_INFO = "pageInfo { hasNextPage endCursor }"

_DOCUMENT_FIELDS = f"""
    id
    title
    content
    icon
    slugId
    url
    createdAt
    updatedAt
    archivedAt
    creator {{ {_USER_FIELDS} }}
    updatedBy {{ {_USER_FIELDS} }}
    project {{ id name }}
    team {{ id name key }}
"""

_PROJECT_FIELDS = f"""
    id
    name
    description
    slugId
    icon
    color
    url
    startDate
    targetDate
    startedAt
    completedAt
    canceledAt
    progress
    health
    createdAt
    updatedAt
    creator {{ {_USER_FIELDS} }}
    lead {{ {_USER_FIELDS} }}
"""

# -- Viewer ------------------------------------------------------------------

VIEWER_QUERY = f"""
query Viewer {{
  viewer {{ {_USER_FIELDS} }}
}}
"""

# -- Issues ------------------------------------------------------------------

GET_ISSUE_QUERY = f"""
query GetIssue($id: String!) {{
  issue(id: $id) {{ {_ISSUE_FIELDS} }}
}}
"""

SEARCH_ISSUES_QUERY = f"""
query SearchIssues($filter: IssueFilter, $first: Int!, $after: String) {{
  issues(filter: $filter, first: $first, after: $after) {{
    nodes {{ {_ISSUE_FIELDS} }}
    {_PAGE_INFO}
  }}
}}
"""

ISSUE_LABELS_QUERY = f"""
query IssueLabels($id: String!, $first: Int!, $after: String) {{
  issue(id: $id) {{
    labels(first: $first, after: $after) {{
      nodes {{ id name color }}
      {_PAGE_INFO}
    }}
  }}
}}
"""

ISSUE_CHILDREN_QUERY = f"""
query IssueChildren($id: String!, $first: Int!, $after: String) {{
  issue(id: $id) {{
    children(first: $first, after: $after) {{
      nodes {{ id identifier title }}
      {_PAGE_INFO}
    }}
  }}
}}
"""

ISSUE_RELATIONS_QUERY = f"""
query IssueRelations($id: String!, $first: Int!, $after: String) {{
  issue(id: $id) {{
    relations(first: $first, after: $after) {{
      nodes {{
        id
        type
        relatedIssue {{ id identifier title }}
      }}
      {_PAGE_INFO}
    }}
  }}
}}
"""

ISSUE_COMMENTS_QUERY = f"""
query IssueComments($id: String!, $first: Int!, $after: String) {{
  issue(id: $id) {{
    comments(first: $first, after: $after) {{
      nodes {{
        id
        body
        createdAt
        updatedAt
        user {{ {_USER_FIELDS} }}
      }}
      {_PAGE_INFO}
    }}
  }}
}}
"""

CREATE_ISSUE_MUTATION = f"""
mutation CreateIssue($input: IssueCreateInput!) {{
  issueCreate(input: $input) {{
    success
    issue {{ {_ISSUE_FIELDS} }}
  }}
}}
"""

UPDATE_ISSUE_MUTATION = """
mutation UpdateIssue($id: String!, $input: IssueUpdateInput!) {
  issueUpdate(id: $id, input: $input) {
    success
    issue { id }
  }
}
"""

DELETE_ISSUE_MUTATION = """
mutation DeleteIssue($id: String!) {
  issueDelete(id: $id) {
    success
  }
}
"""

# -- Comments ----------------------------------------------------------------

CREATE_COMMENT_MUTATION = f"""
mutation CreateComment($input: CommentCreateInput!) {{
  commentCreate(input: $input) {{
    success
    comment {{
      id
      body
      createdAt
      updatedAt
      user {{ {_USER_FIELDS} }}
    }}
  }}
}}
"""

# -- Teams -------------------------------------------------------------------

LIST_TEAMS_QUERY = f"""
query ListTeams($first: Int!, $after: String) {{
  teams(first: $first, after: $after) {{
    nodes {{ id name key description }}
    {_PAGE_INFO}
  }}
}}
"""

GET_TEAM_QUERY = """
query GetTeam($id: String!) {
  team(id: $id) { id name key description }
}
"""

TEAM_STATES_QUERY = f"""
query TeamStates($id: String!, $first: Int!, $after: String) {{
  team(id: $id) {{
    states(first: $first, after: $after) {{
      nodes {{ id name type color position }}
      {_PAGE_INFO}
    }}
  }}
}}
"""

TEAM_CYCLES_QUERY = f"""
query TeamCycles($id: String!, $first: Int!, $after: String) {{
  team(id: $id) {{
    cycles(first: $first, after: $after) {{
      nodes {{ id number name startsAt endsAt completedAt }}
      {_PAGE_INFO}
    }}
  }}
}}
"""

# -- Projects ----------------------------------------------------------------

LIST_PROJECTS_QUERY = f"""
query ListProjects($first: Int!, $after: String, $includeArchived: Boolean, $filter: ProjectFilter) {{
  projects(first: $first, after: $after, includeArchived: $includeArchived, filter: $filter) {{
    nodes {{ {_PROJECT_FIELDS} }}
    {_PAGE_INFO}
  }}
}}
"""

GET_PROJECT_QUERY = f"""
query GetProject($id: String!) {{
  project(id: $id) {{ {_PROJECT_FIELDS} }}
}}
"""

PROJECT_TEAMS_QUERY = f"""
query ProjectTeams($id: String!, $first: Int!, $after: String) {{
  project(id: $id) {{
    teams(first: $first, after: $after) {{
      nodes {{ id name key description }}
      {_PAGE_INFO}
    }}
  }}
}}
"""

PROJECT_UPDATES_QUERY = f"""
query ProjectUpdates($id: String!, $first: Int!, $after: String, $includeArchived: Boolean) {{
  project(id: $id) {{
    projectUpdates(first: $first, after: $after, includeArchived: $includeArchived) {{
      nodes {{
        id
        body
        health
        diffMarkdown
        url
        createdAt
        updatedAt
        user {{ {_USER_FIELDS} }}
      }}
      {_PAGE_INFO}
    }}
  }}
}}
"""

CREATE_PROJECT_UPDATE_MUTATION = f"""
mutation ProjectUpdateCreate($input: ProjectUpdateCreateInput!) {{
  projectUpdateCreate(input: $input) {{
    success
    projectUpdate {{
      id
      body
      health
      diffMarkdown
      url
      createdAt
      updatedAt
      project {{ id name }}
      user {{ {_USER_FIELDS} }}
    }}
  }}
}}
"""

# -- Documents ---------------------------------------------------------------

LIST_DOCUMENTS_QUERY = f"""
query ListDocuments($first: Int!, $after: String, $includeArchived: Boolean, $filter: DocumentFilter) {{
  documents(first: $first, after: $after, includeArchived: $includeArchived, filter: $filter) {{
    nodes {{ {_DOCUMENT_FIELDS} }}
    {_PAGE_INFO}
  }}
}}
"""

GET_DOCUMENT_QUERY = f"""
query GetDocument($id: String!) {{
  document(id: $id) {{ {_DOCUMENT_FIELDS} }}
}}
"""

CREATE_DOCUMENT_MUTATION = f"""
mutation CreateDocument($input: DocumentCreateInput!) {{
  documentCreate(input: $input) {{
    success
    document {{ {_DOCUMENT_FIELDS} }}
  }}
}}
"""

UPDATE_DOCUMENT_MUTATION = f"""
mutation UpdateDocument($id: String!, $input: DocumentUpdateInput!) {{
  documentUpdate(id: $id, input: $input) {{
    success
    document {{ {_DOCUMENT_FIELDS} }}
  }}
}}
"""

DELETE_DOCUMENT_MUTATION = """
mutation DeleteDocument($id: String!) {
  documentDelete(id: $id) {
    success
  }
}
"""
