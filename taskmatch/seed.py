"""Built-in sample data — the plantation estate task list and crew."""

SEED_TASKS = [
    {"id": "t1", "name": "Harvesting"},
    {"id": "t2", "name": "Planting"},
    {"id": "t3", "name": "Maintenance"},
    {"id": "t4", "name": "Pruning"},
    {"id": "t5", "name": "Manuring"},
    {"id": "t6", "name": "Spraying"},
    {"id": "t7", "name": "Weeding"},
    {"id": "t8", "name": "Pest and Disease"},
    {"id": "t9", "name": "Mechanisation Fleet"},
]

SEED_WORKERS = [
    {"id": "w1", "name": "Ahmad", "skill": "Harvesting", "suitability_score": 92,
     "availability": "Available", "experience": 5, "current_tasks": ["Harvesting section A"]},
    {"id": "w2", "name": "Faiz", "skill": "Harvesting", "suitability_score": 84,
     "availability": "Available", "experience": 3, "current_tasks": ["Harvesting section B"]},
    {"id": "w3", "name": "Aiman", "skill": "Planting", "suitability_score": 80,
     "availability": "Busy", "experience": 4, "current_tasks": ["Planting section C"]},
    {"id": "w4", "name": "Siti", "skill": "Harvesting", "suitability_score": 75,
     "availability": "Available", "experience": 2, "current_tasks": ["Assisting Harvesting section B"]},
    {"id": "w5", "name": "Hafiz", "skill": "Harvesting", "suitability_score": 78,
     "availability": "Busy", "experience": 3, "current_tasks": ["Harvesting section C"]},
    {"id": "w6", "name": "Maya", "skill": "Pruning", "suitability_score": 88,
     "availability": "Available", "experience": 4, "current_tasks": ["Pruning section A"]},
    {"id": "w7", "name": "Zul", "skill": "Manuring", "suitability_score": 85,
     "availability": "Available", "experience": 3, "current_tasks": ["Manuring section B"]},
    {"id": "w8", "name": "Lina", "skill": "Spraying", "suitability_score": 90,
     "availability": "Busy", "experience": 5, "current_tasks": ["Spraying section C"]},
    {"id": "w9", "name": "Imran", "skill": "Weeding", "suitability_score": 82,
     "availability": "Available", "experience": 3, "current_tasks": ["Weeding section D"]},
    {"id": "w10", "name": "Fauzi", "skill": "Pest and Disease", "suitability_score": 87,
     "availability": "Available", "experience": 6, "current_tasks": ["Pest inspection section A"]},
    {"id": "w11", "name": "Hana", "skill": "Mechanisation Fleet", "suitability_score": 91,
     "availability": "Busy", "experience": 7, "current_tasks": ["Tractor maintenance"]},
]
