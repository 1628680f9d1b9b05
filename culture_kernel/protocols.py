from typing import Tuple

from .models import Protocol

# Seeding order is the order of this mapping.
PROTOCOLS = {
    "ubuntu_circle": {
        "name": "Ubuntu Circle",
        "origin_culture": "Nguni / Bantu (Southern Africa)",
        "category": "Collaboration",
        "bug_fixed": "Siloed heroics and credit hoarding",
        "mechanism": "Success is defined as collective: a person is a person through other people.",
        "modern_script": {
            "trigger": "A project milestone ships.",
            "contract": "Every retrospective names who unblocked whom before it names who delivered.",
            "vesting": "Recognition is only granted to pairs or groups, never to individuals.",
            "ritual": "Standing circle where each member thanks one colleague by name.",
        },
        "ethical_guardrails": [
            "Never use the circle to shame someone who was not thanked.",
            "Quiet contributors may thank in writing instead of aloud.",
        ],
    },
    "hooponopono": {
        "name": "Ho'oponopono",
        "origin_culture": "Native Hawaiian",
        "category": "Conflict Resolution",
        "bug_fixed": "Lingering grudges after incidents",
        "mechanism": "Structured family reconciliation: confession, forgiveness and release of the entanglement.",
        "modern_script": {
            "trigger": "A post-incident review leaves two parties in open conflict.",
            "contract": "Both parties state the harm they caused before the harm they suffered.",
            "vesting": "The matter is declared closed and may not be cited in later reviews.",
            "ritual": "Facilitated session ending with an explicit 'we release this' statement.",
        },
        "ethical_guardrails": [
            "Participation is voluntary; a facilitator may never compel forgiveness.",
            "Does not replace formal processes for harassment or misconduct.",
            "What is said in the session stays in the session.",
        ],
    },
    "seventh_generation": {
        "name": "Seventh Generation Principle",
        "origin_culture": "Haudenosaunee (Iroquois Confederacy)",
        "category": "Decision Making",
        "bug_fixed": "Quarterly short-termism",
        "mechanism": "Decisions are weighed by their effect on people seven generations ahead.",
        "modern_script": {
            "trigger": "An architectural or policy decision with multi-year consequences.",
            "contract": "The proposal must include a section written from the view of a future maintainer.",
            "vesting": "A designated future advocate can delay the decision by one cycle.",
            "ritual": "The future advocate reads their section aloud before any vote.",
        },
        "ethical_guardrails": [
            "The future advocate role rotates so no one owns the veto.",
            "Cannot be invoked to block urgent safety fixes.",
        ],
    },
    "nemawashi": {
        "name": "Nemawashi",
        "origin_culture": "Japanese",
        "category": "Decision Making",
        "bug_fixed": "Surprise objections that derail meetings",
        "mechanism": "Laying the groundwork: informal one-on-one consultation before a formal decision.",
        "modern_script": {
            "trigger": "A proposal will be decided in a group meeting.",
            "contract": "The author talks to every affected stakeholder individually beforehand.",
            "vesting": "Objections raised for the first time in the meeting are deferred, not decided.",
            "ritual": "The meeting opens by listing who was consulted and what changed.",
        },
        "ethical_guardrails": [
            "Consultation must not become private lobbying against absent people.",
            "Dissent gathered in private is reported faithfully in public.",
        ],
    },
    "kaizen": {
        "name": "Kaizen",
        "origin_culture": "Japanese",
        "category": "Continuous Improvement",
        "bug_fixed": "Big-bang improvement programs that stall",
        "mechanism": "Many small, continuous improvements owned by the people who do the work.",
        "modern_script": {
            "trigger": "Any team member notices friction in a recurring task.",
            "contract": "One improvement per person per week, no approval needed under one hour of effort.",
            "vesting": "Improvements are logged and become the new standard immediately.",
            "ritual": "Weekly five-minute round where each change is shown, not described.",
        },
        "ethical_guardrails": [
            "Improvements may not add unpaid work for other teams.",
            "No counting of improvements in performance reviews.",
        ],
    },
    "jirga": {
        "name": "Jirga",
        "origin_culture": "Pashtun",
        "category": "Conflict Resolution",
        "bug_fixed": "Escalations with no neutral forum",
        "mechanism": "A council of respected elders hears both sides and issues a binding settlement.",
        "modern_script": {
            "trigger": "A dispute between teams is escalated twice without resolution.",
            "contract": "Three uninvolved senior peers hear both sides within one week.",
            "vesting": "The panel's written decision binds both teams for one quarter.",
            "ritual": "Each side presents, the panel deliberates privately, the decision is read to both.",
        },
        "ethical_guardrails": [
            "Panel members must declare any relationship with either party.",
            "Decisions cannot impose penalties on individuals.",
            "Either side may appeal once to a different panel.",
        ],
    },
    "potlatch": {
        "name": "Potlatch",
        "origin_culture": "Kwakwaka'wakw and Pacific Northwest Coast peoples",
        "category": "Recognition",
        "bug_fixed": "Status derived from hoarding knowledge",
        "mechanism": "Prestige is earned by giving away wealth, not accumulating it.",
        "modern_script": {
            "trigger": "End of a quarter.",
            "contract": "Senior members publish tools, notes or templates they built for others to reuse.",
            "vesting": "Standing is measured by how widely one's contributions are reused.",
            "ritual": "Gift-giving session where each person hands over one reusable artifact.",
        },
        "ethical_guardrails": [
            "Giving must not become competitive spending of others' time.",
            "Junior members are never expected to give to receive recognition.",
        ],
    },
    "shmita": {
        "name": "Shmita",
        "origin_culture": "Jewish",
        "category": "Rest and Renewal",
        "bug_fixed": "Burnout and backlogs that never shrink",
        "mechanism": "Every seventh year the land rests and debts are released.",
        "modern_script": {
            "trigger": "Every seventh sprint.",
            "contract": "No new feature work; the sprint is for rest, cleanup and learning.",
            "vesting": "Stale tickets older than one year are closed without guilt.",
            "ritual": "Opening announcement of the fallow sprint and a closing list of what was released.",
        },
        "ethical_guardrails": [
            "On-call duties still rotate fairly during the fallow sprint.",
            "Nobody is asked to make up the time afterwards.",
        ],
    },
    "lagom": {
        "name": "Lagom",
        "origin_culture": "Swedish",
        "category": "Resource Allocation",
        "bug_fixed": "Chronic overcommitment",
        "mechanism": "Not too much, not too little: just enough, shared fairly.",
        "modern_script": {
            "trigger": "Sprint planning.",
            "contract": "Planned work is capped at seventy percent of capacity.",
            "vesting": "Unused slack is spent on the team's own choice, not on extra tickets.",
            "ritual": "Planning ends with each person saying whether their load feels 'lagom'.",
        },
        "ethical_guardrails": [
            "The cap applies to managers as well as individual contributors.",
            "A 'too much' answer is acted on without requiring justification.",
        ],
    },
    "harambee": {
        "name": "Harambee",
        "origin_culture": "Kenyan",
        "category": "Collective Effort",
        "bug_fixed": "Underfunded shared infrastructure",
        "mechanism": "'All pull together': community self-help events pooling resources for a common need.",
        "modern_script": {
            "trigger": "A shared service everyone depends on has no owner or budget.",
            "contract": "Each team pledges a fixed number of hours to the shared service.",
            "vesting": "Pledges are published and tracked publicly until the goal is met.",
            "ritual": "Kick-off call where pledges are announced and the goal is shown.",
        },
        "ethical_guardrails": [
            "Pledges are voluntary and may be zero without explanation.",
            "Pledge sizes are never compared between individuals.",
        ],
    },
    "palaver_tree": {
        "name": "Palaver Tree",
        "origin_culture": "West African",
        "category": "Deliberation",
        "bug_fixed": "Decisions made without hearing everyone",
        "mechanism": "The community gathers under a tree and talks until consensus is reached.",
        "modern_script": {
            "trigger": "A decision affects the whole group and no deadline forces it.",
            "contract": "Discussion continues across sessions until no one holds a blocking objection.",
            "vesting": "The agreed outcome is recorded in the words of the group.",
            "ritual": "Open-ended session held in a fixed, informal place.",
        },
        "ethical_guardrails": [
            "Consensus may not be declared by the most senior person alone.",
            "Anyone may call a pause; pauses are not treated as obstruction.",
        ],
    },
    "talking_stick": {
        "name": "Talking Stick",
        "origin_culture": "Indigenous peoples of the Pacific Northwest",
        "category": "Communication",
        "bug_fixed": "The loudest voice wins",
        "mechanism": "Only the holder of the stick may speak; everyone else listens.",
        "modern_script": {
            "trigger": "A discussion where interruptions dominate.",
            "contract": "A token is passed in order; the holder speaks uninterrupted.",
            "vesting": "Before passing the token on, the next speaker restates the previous point.",
            "ritual": "A physical or virtual object is passed around the circle.",
        },
        "ethical_guardrails": [
            "Holders may pass without speaking.",
            "Speaking time is bounded so the token cannot be monopolized.",
        ],
    },
    "althing": {
        "name": "Althing",
        "origin_culture": "Norse (Iceland)",
        "category": "Governance",
        "bug_fixed": "No shared forum to set and recite rules",
        "mechanism": "A yearly assembly where a lawspeaker recites the law from memory and disputes are settled.",
        "modern_script": {
            "trigger": "Start of the year.",
            "contract": "The team's working agreements are read aloud in full by a rotating lawspeaker.",
            "vesting": "Agreements not recited lapse and must be re-proposed.",
            "ritual": "Annual assembly where agreements are recited, amended and ratified.",
        },
        "ethical_guardrails": [
            "Every member has an equal vote on amendments.",
            "The lawspeaker role rotates yearly.",
        ],
    },
    "shura": {
        "name": "Shura",
        "origin_culture": "Arab / Islamic",
        "category": "Consultation",
        "bug_fixed": "Leaders deciding without consultation",
        "mechanism": "Leaders are obliged to consult those affected before deciding.",
        "modern_script": {
            "trigger": "A leadership decision that changes how people work.",
            "contract": "A written consultation is open for three working days before the decision.",
            "vesting": "The final decision lists the consultation input it accepted and rejected.",
            "ritual": "Consultation notice posted to the whole group with a clear closing date.",
        },
        "ethical_guardrails": [
            "Input may be submitted anonymously.",
            "Consultation cannot be run after the decision is already made.",
        ],
    },
    "bayanihan": {
        "name": "Bayanihan",
        "origin_culture": "Filipino",
        "category": "Mutual Aid",
        "bug_fixed": "People left to carry heavy transitions alone",
        "mechanism": "Neighbours literally carry a family's house to its new location together.",
        "modern_script": {
            "trigger": "A colleague faces a large migration, relocation or handover.",
            "contract": "Volunteers form a crew for a single, time-boxed push.",
            "vesting": "The crew disbands when the move is done; no permanent ownership transfers.",
            "ritual": "Shared meal or call after the push to mark completion.",
        },
        "ethical_guardrails": [
            "Help is offered, never assigned.",
            "The person being helped keeps decision authority.",
        ],
    },
    "hansei": {
        "name": "Hansei",
        "origin_culture": "Japanese",
        "category": "Reflection",
        "bug_fixed": "Postmortems that never name ownership",
        "mechanism": "Self-reflection: acknowledging one's own mistakes and committing to improvement.",
        "modern_script": {
            "trigger": "A project ends, successful or not.",
            "contract": "Each leader names one thing they personally would do differently.",
            "vesting": "Commitments are revisited at the start of the next project.",
            "ritual": "Reflection meeting that starts with the most senior person's own mistakes.",
        },
        "ethical_guardrails": [
            "Reflection is about oneself; pointing at others is out of order.",
            "Admissions are never used as evidence in performance reviews.",
        ],
    },
    "dugnad": {
        "name": "Dugnad",
        "origin_culture": "Norwegian",
        "category": "Collective Maintenance",
        "bug_fixed": "Technical debt nobody owns",
        "mechanism": "Neighbours gather for voluntary communal upkeep, followed by a shared meal.",
        "modern_script": {
            "trigger": "Twice a year, or when shared debt crosses an agreed threshold.",
            "contract": "One day where everyone works only on shared maintenance tasks.",
            "vesting": "Tasks are picked from a public list; completed tasks are celebrated together.",
            "ritual": "Morning task selection and an afternoon meal together.",
        },
        "ethical_guardrails": [
            "Unpleasant tasks are distributed by lot, not by seniority.",
            "Remote members get an equivalent way to join the meal.",
        ],
    },
    "sulha": {
        "name": "Sulha",
        "origin_culture": "Levantine Arab",
        "category": "Reconciliation",
        "bug_fixed": "Cross-team conflicts that harden into feuds",
        "mechanism": "Mediators negotiate a public settlement and a ceremony restores honour to both sides.",
        "modern_script": {
            "trigger": "Two teams have stopped cooperating after a dispute.",
            "contract": "Neutral mediators shuttle between the teams until terms are agreed.",
            "vesting": "The settlement is announced publicly and both sides acknowledge it.",
            "ritual": "Joint session where both leads shake hands and share coffee.",
        },
        "ethical_guardrails": [
            "Mediators may not report private statements to management.",
            "Settlements cannot require anyone to leave the team.",
        ],
    },
    "minga": {
        "name": "Minga",
        "origin_culture": "Andean (Quechua)",
        "category": "Collective Work",
        "bug_fixed": "Shared tasks that languish in the backlog",
        "mechanism": "Community work parties for projects that benefit everyone, with reciprocity expected.",
        "modern_script": {
            "trigger": "A shared task has been stuck for more than two sprints.",
            "contract": "The task is swarmed by volunteers from several teams for one day.",
            "vesting": "The benefiting team owes a future minga to a contributing team.",
            "ritual": "Swarm day opened with a short statement of the common benefit.",
        },
        "ethical_guardrails": [
            "Reciprocity debts are between teams, never individuals.",
            "Teams may decline to call in their debt.",
        ],
    },
    "kgotla": {
        "name": "Kgotla",
        "origin_culture": "Tswana (Botswana)",
        "category": "Public Deliberation",
        "bug_fixed": "Leadership disconnected from staff",
        "mechanism": "Public meeting where the chief listens and any member may speak freely.",
        "modern_script": {
            "trigger": "Monthly, or when a major change is announced.",
            "contract": "Leaders attend to listen; they may only ask clarifying questions.",
            "vesting": "Leaders publish written responses to every point raised within a week.",
            "ritual": "Open floor session with leaders seated among staff.",
        },
        "ethical_guardrails": [
            "No retaliation for anything said at the kgotla.",
            "Leaders may not delegate attendance.",
        ],
    },
    "fika": {
        "name": "Fika",
        "origin_culture": "Swedish",
        "category": "Social Cohesion",
        "bug_fixed": "No informal contact between teams",
        "mechanism": "A protected daily pause for coffee and conversation.",
        "modern_script": {
            "trigger": "Every day at a fixed time.",
            "contract": "Work talk is optional; meetings are not scheduled over fika.",
            "vesting": "Teams rotate hosting so people from different groups meet.",
            "ritual": "Fifteen-minute shared break, in person or on an open call.",
        },
        "ethical_guardrails": [
            "Attendance is never tracked.",
            "Dietary and cultural needs are respected in what is served.",
        ],
    },
}


def canonical_protocols() -> Tuple[Protocol, ...]:
    return tuple(
        Protocol(protocol_id=protocol_id, **record)
        for protocol_id, record in PROTOCOLS.items()
    )


CANONICAL_IDS = tuple(PROTOCOLS)
