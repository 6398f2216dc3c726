from __future__ import annotations

import argparse
import json
import sys
from pathlib import Path

from jobfit.core.config import settings
from jobfit.core.observability import configure_logging
from jobfit.errors import JobFitError
from jobfit.services.resume_service import ResumeService
from jobfit.store.document_store import InMemoryDocumentStore, SqliteDocumentStore


def main() -> int:
    parser = argparse.ArgumentParser(description="Normalize a resume and score it against a job description.")
    parser.add_argument("resume", help="Resume file (.pdf, .docx or .txt)")
    parser.add_argument("--jd", help="Text file holding the job description. Omit to run the readiness check only.")
    parser.add_argument("--company", default="Unknown company")
    parser.add_argument("--position", default="Unknown position")
    parser.add_argument("--user", default="cli", help="User id the resume version is stored under")
    parser.add_argument(
        "--persist",
        action="store_true",
        help=f"Store results in the SQLite document store ({settings.document_store_path}).",
    )
    args = parser.parse_args()

    configure_logging()
    store = SqliteDocumentStore(settings.document_store_path) if args.persist else InMemoryDocumentStore()
    service = ResumeService(store)

    resume_path = Path(args.resume)
    try:
        version = service.upload_resume(args.user, resume_path.name, resume_path.read_bytes())
        output: dict[str, object] = {"resume_version_id": version.id, "structured": version.structured.model_dump(mode="json")}

        if args.jd:
            job = service.create_job(
                args.user,
                company=args.company,
                position=args.position,
                job_description=Path(args.jd).read_text(encoding="utf-8"),
            )
            report, cached = service.match(args.user, job.id, version_id=version.id)
            output["match"] = report.model_dump(mode="json")
            output["cached"] = cached
        else:
            output["readiness"] = service.assess(args.user, version.id).model_dump(mode="json")
    except JobFitError as exc:
        print(f"error [{exc.code}]: {exc}", file=sys.stderr)
        return 1

    print(json.dumps(output, indent=2, ensure_ascii=False))
    return 0


if __name__ == "__main__":
    sys.exit(main())
