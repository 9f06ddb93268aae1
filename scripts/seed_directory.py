#!/usr/bin/env python
from __future__ import annotations

import argparse
import sys
from pathlib import Path

sys.path.append(str(Path(__file__).resolve().parents[1]))

from orgdirectory.application import build_directory_service
from orgdirectory.core.logsetup import configure_logging
from orgdirectory.domain import Department
from orgdirectory.infrastructure import JsonFileStorageBackend

SAMPLE_INSTRUCTIONS = {
    Department.CONTENT_CREATION: "Write in a formal, concise tone and cite sources when available.",
    Department.SUMMARIZER: "Summarize in five bullet points, keeping numbers and dates intact.",
    Department.THEME_PLANNER: "Propose themes grouped by month with one-line rationales.",
    Department.SMART_HASHTAG_SUGGESTIONS: "Suggest at most eight hashtags, lowercase, no spaces.",
}


def main() -> None:
    parser = argparse.ArgumentParser(description="Seed a JSON directory store with sample data")
    parser.add_argument("--root", required=True, help="JSON store directory")
    parser.add_argument("--company", default="Acme", help="company name")
    parser.add_argument("--logo-url", default=None, help="optional company logo URL")
    parser.add_argument("--activate", action="store_true", help="select each new employee for its department")
    args = parser.parse_args()

    configure_logging()
    service = build_directory_service(JsonFileStorageBackend(Path(args.root)))

    company = service.companies.create({"name": args.company, "logo_url": args.logo_url})
    for department, instructions in SAMPLE_INSTRUCTIONS.items():
        employee = service.employees.create(
            {
                "name": f"{department.label} lead",
                "instructions": instructions,
                "department": department,
                "company_id": company.id,
            }
        )
        if args.activate:
            service.assignments.set_active(department, employee.id)

    service.scope.set(company.id)
    print(f"seeded company {company.name} ({company.id}) into {args.root}")


if __name__ == "__main__":
    main()
