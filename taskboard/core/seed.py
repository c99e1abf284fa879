"""
FILE: taskboard/core/seed.py
PURPOSE: Built-in sample board used when no snapshot exists
EXPORTS:
  - DEFAULT_COLUMNS: Column definitions for a fresh board
  - SAMPLE_ASSIGNEES: Assignee directory
  - SAMPLE_CATEGORIES: Category allow-list
  - SAMPLE_TASKS: Sample engineering tasks
  - default_columns() -> List[Column]
  - sample_tasks() -> List[Task]
  - sample_assignees() -> List[Assignee]
NOTES:
  - Convenience data for empty installations, not a production source
  - Plain dicts in snapshot format, converted with from_dict()
"""

from typing import List

from .models import Assignee, Column, Task

_EPOCH = "2024-01-01T00:00:00+00:00"

DEFAULT_COLUMNS = [
    {"id": "all-jobs", "title": "All Jobs", "order": 0},
    {"id": "draft", "title": "Draft", "order": 1},
    {"id": "to-do", "title": "To-do", "order": 2},
    {"id": "quoted", "title": "Quoted", "order": 3},
    {"id": "in-progress", "title": "In Progress", "order": 4},
    {"id": "completed", "title": "Completed", "order": 5},
    {"id": "in-review", "title": "In Review", "order": 6},
    {"id": "cancelled", "title": "Cancelled", "order": 7},
]

SAMPLE_ASSIGNEES = [
    {"id": "1", "name": "Current User", "initials": "CU", "role": "Senior Structural Engineer", "department": "NEOM Development"},
    {"id": "2", "name": "Dr. Khalid Al-Mutairi", "initials": "KM", "role": "Lead MEP Engineer", "department": "Aramco Projects"},
    {"id": "3", "name": "Fatima Al-Zahra", "initials": "FZ", "role": "Environmental Engineer", "department": "Red Sea Global"},
    {"id": "4", "name": "Omar Hassan", "initials": "OH", "role": "Civil Engineer", "department": "SABIC Engineering"},
    {"id": "5", "name": "Sarah Al-Dosari", "initials": "SD", "role": "Project Manager", "department": "Saudi Railway Company"},
    {"id": "6", "name": "Mohammed Bin Rashid", "initials": "MR", "role": "Smart City Specialist", "department": "Qiddiya Development"},
    {"id": "7", "name": "Noura Al-Mansouri", "initials": "NM", "role": "Quality Assurance Engineer", "department": "SEC Projects"},
    {"id": "8", "name": "Abdullah Al-Shehri", "initials": "AS", "role": "Safety Engineer", "department": "NWC Infrastructure"},
]

SAMPLE_CATEGORIES = [
    "Structural Engineering",
    "MEP Systems",
    "Civil Infrastructure",
    "Environmental Impact",
    "Smart City Solutions",
    "Quality Assurance",
    "Safety Compliance",
    "Project Management",
]

SAMPLE_TASKS = [
    {
        "id": "1",
        "title": "NEOM Smart City - Structural Analysis",
        "description": "Perform comprehensive structural analysis for the main residential tower in NEOM smart city project. Include seismic load calculations and wind resistance analysis.",
        "status": "in-progress",
        "priority": "High",
        "category": "Structural Engineering",
        "assignees": ["1", "3"],
        "due_date": "2024-02-15",
        "created_at": "2024-01-15",
        "updated_at": "2024-01-20",
        "project_id": "NEOM-001",
        "estimated_hours": 40,
        "actual_hours": 25,
        "tags": ["NEOM", "Structural", "Analysis"],
        "attachments": ["structural-calc.pdf"],
    },
    {
        "id": "2",
        "title": "Red Sea Resort - MEP Design Review",
        "description": "Review MEP system designs for the luxury resort complex. Focus on energy efficiency and sustainability requirements.",
        "status": "in-review",
        "priority": "Medium",
        "category": "MEP Systems",
        "assignees": ["2", "5"],
        "due_date": "2024-02-20",
        "created_at": "2024-01-10",
        "updated_at": "2024-01-22",
        "project_id": "RSG-002",
        "estimated_hours": 32,
        "actual_hours": 32,
        "tags": ["Red Sea", "MEP", "Sustainability"],
        "attachments": ["mep-designs.dwg"],
    },
    {
        "id": "3",
        "title": "Riyadh Metro - Environmental Assessment",
        "description": "Conduct environmental impact assessment for Phase 2 of Riyadh Metro expansion. Include noise pollution and air quality analysis.",
        "status": "to-do",
        "priority": "High",
        "category": "Environmental Impact",
        "assignees": ["3", "8"],
        "due_date": "2024-03-01",
        "created_at": "2024-01-18",
        "updated_at": "2024-01-18",
        "project_id": "RMT-003",
        "estimated_hours": 48,
        "actual_hours": 0,
        "tags": ["Metro", "Environmental", "Assessment"],
    },
    {
        "id": "4",
        "title": "Qiddiya Theme Park - Safety Protocols",
        "description": "Develop comprehensive safety protocols for the new Qiddiya theme park attractions. Include emergency response procedures.",
        "status": "completed",
        "priority": "High",
        "category": "Safety Compliance",
        "assignees": ["8", "7"],
        "due_date": "2024-01-30",
        "created_at": "2024-01-05",
        "updated_at": "2024-01-28",
        "project_id": "QID-004",
        "estimated_hours": 24,
        "actual_hours": 28,
        "tags": ["Qiddiya", "Safety", "Protocols"],
        "attachments": ["safety-manual.pdf"],
    },
    {
        "id": "5",
        "title": "Aramco Refinery - Quality Control",
        "description": "Implement quality control measures for the new Aramco refinery expansion project. Ensure compliance with international standards.",
        "status": "in-progress",
        "priority": "Medium",
        "category": "Quality Assurance",
        "assignees": ["7", "4"],
        "due_date": "2024-02-25",
        "created_at": "2024-01-12",
        "updated_at": "2024-01-21",
        "project_id": "ARF-005",
        "estimated_hours": 36,
        "actual_hours": 18,
        "tags": ["Aramco", "Quality", "Standards"],
    },
    {
        "id": "6",
        "title": "Saudi Railway Network - Feasibility Study",
        "description": "Draft initial feasibility study for the new high-speed railway network connecting major cities.",
        "status": "draft",
        "priority": "Medium",
        "category": "Project Management",
        "assignees": ["5"],
        "due_date": "2024-03-15",
        "created_at": "2024-01-25",
        "updated_at": "2024-01-25",
        "project_id": "SRN-006",
        "estimated_hours": 60,
        "actual_hours": 0,
        "tags": ["Railway", "Feasibility", "Study"],
    },
    {
        "id": "7",
        "title": "King Abdullah Financial District - HVAC Design",
        "description": "Prepare detailed quotation for HVAC system design and installation.",
        "status": "quoted",
        "priority": "High",
        "category": "MEP Systems",
        "assignees": ["2", "6"],
        "due_date": "2024-02-28",
        "created_at": "2024-01-20",
        "updated_at": "2024-01-22",
        "project_id": "KAFD-007",
        "estimated_hours": 45,
        "actual_hours": 0,
        "tags": ["KAFD", "HVAC", "Design"],
    },
    {
        "id": "8",
        "title": "AlUla Heritage Site - Water Management",
        "description": "Water management system design was cancelled due to archaeological site restrictions.",
        "status": "cancelled",
        "priority": "Low",
        "category": "Civil Infrastructure",
        "assignees": ["4"],
        "due_date": "2024-02-10",
        "created_at": "2024-01-08",
        "updated_at": "2024-01-25",
        "project_id": "ALU-008",
        "estimated_hours": 30,
        "actual_hours": 5,
        "tags": ["AlUla", "Water", "Heritage"],
    },
]


def default_columns() -> List[Column]:
    """Fresh copies of the default column set."""
    return [
        Column.from_dict({**column, "created_at": _EPOCH, "updated_at": _EPOCH})
        for column in DEFAULT_COLUMNS
    ]


def sample_tasks() -> List[Task]:
    return [Task.from_dict(task) for task in SAMPLE_TASKS]


def sample_assignees() -> List[Assignee]:
    return [Assignee.from_dict(assignee) for assignee in SAMPLE_ASSIGNEES]
