"""
Prompt templates for the two generation backends.

Both templates embed the same normalised data: profile fields with literal
fallbacks, the first MAX_PROMPT_REPOSITORIES repositories, and a prefix of
each README. The README budget differs per backend (Gemini gets 300
characters, GPT-4o gets 200) to keep prompt size and cost in check.
"""
from datetime import datetime
from typing import List, Optional

from core.models import PortfolioPayload, PortfolioRepository

MAX_PROMPT_REPOSITORIES = 10
GEMINI_README_LIMIT = 300
GPT_README_LIMIT = 200

NO_INFO = "정보 없음"
NO_DESCRIPTION = "설명 없음"
NO_LANGUAGE = "언어 정보 없음"
NO_TOPICS = "없음"
NO_DATE = "날짜 정보 없음"
NO_CONTACT = "연락처 정보 없음"

GPT_SYSTEM_PROMPT = (
    "당신은 전문적인 포트폴리오 작성자입니다. "
    "GitHub 데이터를 분석하여 개인화된 포트폴리오를 생성합니다."
)


def select_repositories(payload: PortfolioPayload) -> List[PortfolioRepository]:
    """The bounded prefix of repositories that goes into a prompt."""
    return payload.repositories[:MAX_PROMPT_REPOSITORIES]


def readme_excerpt(readme: Optional[str], limit: int) -> Optional[str]:
    """First `limit` characters of a README followed by '...', or None."""
    if not readme:
        return None
    return f"{readme[:limit]}..."


def format_date(value: Optional[str]) -> str:
    # ko-KR short date, e.g. "2024. 3. 7."
    if not value:
        return NO_DATE
    try:
        parsed = datetime.fromisoformat(value.replace("Z", "+00:00"))
    except ValueError:
        return value
    return f"{parsed.year}. {parsed.month}. {parsed.day}."


def _gemini_repository_block(index: int, repo: PortfolioRepository) -> str:
    excerpt = readme_excerpt(repo.readme, GEMINI_README_LIMIT)
    readme_line = f"- README 요약: {excerpt}" if excerpt else ""
    topics = ", ".join(repo.topics) if repo.topics else NO_TOPICS
    return f"""
**{index}. {repo.name}**
   - 설명: {repo.description or NO_DESCRIPTION}
   - 주요 언어: {repo.language or NO_LANGUAGE}
   - 관심도: ⭐ {repo.stars} | 🍴 {repo.forks}
   - 활동 기간: {format_date(repo.created_at)} ~ {format_date(repo.updated_at)}
   - 주제: {topics}
   {readme_line}
"""


def render_gemini_prompt(payload: PortfolioPayload) -> str:
    user = payload.user
    name = user.display_name
    projects = "".join(
        _gemini_repository_block(i, repo) for i, repo in enumerate(select_repositories(payload), start=1)
    )
    email_line = f"- **Email**: {user.email}" if user.email else ""

    return f"""
당신은 세계 최고 수준의 기술 포트폴리오 전문가입니다. GitHub 데이터를 심층 분석하여 전문적이고 매력적인 포트폴리오를 작성해주세요.

## 분석 대상 정보

### 개발자 프로필
- **이름**: {name}
- **소개**: {user.bio or NO_INFO}
- **커뮤니티 영향력**: 팔로워 {user.followers}명 | 팔로잉 {user.following}명
- **공개 저장소**: {user.public_repos}개

### 주요 프로젝트 목록
{projects}

## 작성 가이드라인

다음 구조로 **마크다운 형식**의 전문적인 포트폴리오를 작성해주세요:

# 💼 {name}

> 한 줄로 개발자를 표현하는 임팩트 있는 소개 문구

---

## 👨‍💻 About Me

개발자의 전문성, 경험, 개발 철학을 3-4문장으로 서술해주세요.
- GitHub 활동과 프로젝트 특성을 분석하여 개발자의 강점 부각
- 구체적인 수치와 성과를 포함
- 전문적이면서도 친근한 톤 유지

## 🛠 Tech Stack

프로젝트에서 사용된 언어와 기술을 분석하여 다음 카테고리로 분류:

### Languages
가장 많이 사용된 언어 상위 5개 (배지 형식으로 표현)

### Frameworks & Libraries
프로젝트에서 발견된 주요 프레임워크와 라이브러리

### Tools & Platforms
개발 도구 및 플랫폼 (GitHub Topics 활용)

## 🚀 Featured Projects

**가장 주목할 만한 프로젝트 3-5개**를 선정하여 다음 형식으로 작성:

### 📌 [프로젝트명]
- **설명**: 프로젝트의 목적과 핵심 기능 (2-3문장)
- **기술 스택**: 사용된 주요 기술
- **성과**: 스타 수, 포크 수, 특별한 성과
- **하이라이트**: README에서 추출한 핵심 내용 또는 특징적인 구현 사항

## 📊 GitHub Analytics

- 📦 **총 저장소**: {user.public_repos}개
- 👥 **커뮤니티**: 팔로워 {user.followers}명 | 팔로잉 {user.following}명
- ⭐ **총 스타 수**: (모든 프로젝트의 스타 합계)
- 🔥 **활동 기간**: 가장 오래된 프로젝트 ~ 최근 업데이트

## 🎯 Areas of Expertise

README와 프로젝트 분석을 통해 발견된 전문 분야를 3-5개 항목으로 정리:
- 각 분야별로 관련 프로젝트와 기술을 구체적으로 언급
- 왜 이 분야의 전문가로 볼 수 있는지 근거 제시

## 💡 Development Journey

프로젝트 생성 날짜와 기술 스택 변화를 분석하여 개발자의 성장 스토리를 작성:
- 시간 순서대로 기술 스택의 진화 과정 서술
- 주요 마일스톤 프로젝트 언급
- 현재 관심사와 학습 방향 추론

## 📫 Contact & Links

- **GitHub**: [@{user.login}](https://github.com/{user.login})
{email_line}

---

**⚠️ 중요 작성 규칙:**
1. 모든 내용은 **마크다운 형식**으로 작성 (제목, 링크, 볼드, 리스트 등 적극 활용)
2. 실제 데이터를 기반으로 구체적이고 정확하게 작성
3. 일반적인 설명보다는 **이 개발자만의 특징**을 강조
4. 각 섹션은 간결하지만 임팩트 있게 작성
5. 기술 용어는 정확하게 사용
6. README 내용이 있는 경우 핵심 정보를 적극 활용
7. 프로페셔널하면서도 읽기 쉬운 톤 유지
"""


def _gpt_repository_block(index: int, repo: PortfolioRepository) -> str:
    excerpt = readme_excerpt(repo.readme, GPT_README_LIMIT)
    readme_line = f"- README 내용: {excerpt}" if excerpt else ""
    readme_flag = "있음" if repo.has_readme else "없음"
    return f"""
{index}. {repo.name}
   - 설명: {repo.description or NO_DESCRIPTION}
   - 언어: {repo.language or NO_LANGUAGE}
   - 스타: {repo.stars}개
   - 포크: {repo.forks}개
   - README: {readme_flag}
   {readme_line}
"""


def render_gpt_prompt(payload: PortfolioPayload) -> str:
    user = payload.user
    name = user.display_name
    projects = "".join(
        _gpt_repository_block(i, repo) for i, repo in enumerate(select_repositories(payload), start=1)
    )

    return f"""
당신은 전문적인 포트폴리오 작성자입니다. 다음 GitHub 사용자 데이터를 분석하여 개인화된 포트폴리오를 생성해주세요.

사용자 정보:
- 이름: {name}
- 바이오: {user.bio or NO_INFO}
- 팔로워: {user.followers}명
- 팔로잉: {user.following}명
- Public Repository: {user.public_repos}개

주요 프로젝트들:
{projects}

위 정보를 바탕으로 다음 형식으로 포트폴리오를 생성해주세요:

# {name}의 포트폴리오

## 👋 소개
[사용자의 바이오와 GitHub 활동을 바탕으로 한 개인 소개]

## 🚀 주요 기술 스택
[사용된 프로그래밍 언어들을 분석하여 기술 스택 정리]

## 💼 주요 프로젝트
[가장 인상적인 프로젝트들을 선별하여 상세 설명]

## 📊 GitHub 통계
[팔로워, 팔로잉, Repository 수 등 통계 정보]

## 🎯 관심사 및 전문 분야
[README 파일과 프로젝트 분석을 바탕으로 한 전문 분야]

## 📈 성장 과정
[프로젝트 생성 날짜와 활동 패턴을 분석한 성장 과정]

## 🔗 연락처
- GitHub: https://github.com/{user.login}
- 이메일: {user.email or NO_CONTACT}

위 형식으로 한국어로 포트폴리오를 작성해주세요. 각 섹션은 구체적이고 개인화된 내용으로 작성해주세요.
"""
