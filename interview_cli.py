"""interview_cli.py
Run a mock interview from the command line.
Example: `python interview_cli.py path/to/job_description.txt "Backend Engineer" "Acme"`
"""
import asyncio
import sys
from pathlib import Path

from career_studio.exceptions import AIGatewayError, InterviewSessionError
from career_studio.models import JobApplication
from career_studio.ai_gateway.gateway import AIGateway
from career_studio.state.interview_session import InterviewSessionManager


async def run_interview(job: JobApplication) -> None:
    manager = InterviewSessionManager(AIGateway())
    session = await manager.start(job)
    print(f"Interviewer: {session.transcript[0].text}\n")

    while True:
        answer = await asyncio.to_thread(input, "You: ")
        if answer.strip().lower() in {"quit", "exit"}:
            break
        if not answer.strip():
            continue
        reply = await manager.submit(answer)
        if reply is not None:
            print(f"\nInterviewer: {reply.text}\n")

    manager.end()
    print("Interview ended.")


def main():
    if len(sys.argv) < 2:
        print("Usage: python interview_cli.py <job_description_file> [position] [company]")
        sys.exit(1)

    job_description = Path(sys.argv[1]).read_text(encoding="utf-8")
    job = JobApplication(
        id="cli",
        company=sys.argv[3] if len(sys.argv) > 3 else "Company",
        position=sys.argv[2] if len(sys.argv) > 2 else "Position",
        job_description=job_description,
    )

    print("Mock interview started. Type 'quit' to finish.\n")
    try:
        asyncio.run(run_interview(job))
    except (AIGatewayError, InterviewSessionError) as e:
        print(f"Could not run interview: {e}")
        sys.exit(1)


if __name__ == "__main__":
    try:
        main()
    except KeyboardInterrupt:
        print("\nKeyboard interrupt received. Exiting...")
        sys.exit(0)
