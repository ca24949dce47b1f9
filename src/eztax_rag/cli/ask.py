import argparse
import logging
import sys
from pathlib import Path
from typing import Callable

from ..config import find_config_path, load_config
from ..pipelines import RetrievalPipeline, create_store_from_config
from ..stores import ChunkStoreCache, JSONChunkStore, StoreLoadError

logger = logging.getLogger(__name__)

EXIT_WORDS = {"quit", "exit", "종료"}

UI_TEXT = {
    "ko": {
        "banner": "=== 세법 RAG 시스템 ===",
        "intro": '미국 세법에 관한 질문을 해주세요. 종료하려면 "quit"를 입력하세요.',
        "prompt": "질문: ",
        "empty": "질문을 입력해주세요.",
        "sources": "=== 검색된 관련 문서 ===",
        "answer": "=== 답변 ===",
        "bye": "세법 RAG 시스템을 종료합니다.",
        "missing_store": '벡터 저장소를 찾을 수 없습니다. 먼저 "eztax-seed"를 실행해주세요.',
    },
    "en": {
        "banner": "=== Tax RAG System ===",
        "intro": 'Ask a question about U.S. tax law. Type "quit" to exit.',
        "prompt": "Question: ",
        "empty": "Please enter a question.",
        "sources": "=== Retrieved documents ===",
        "answer": "=== Answer ===",
        "bye": "Exiting the tax RAG system.",
        "missing_store": 'Vector store not found. Run "eztax-seed" first.',
    },
}


def _text(language: str) -> dict[str, str]:
    return UI_TEXT.get(language, UI_TEXT["ko"])


def answer_question(pipeline: RetrievalPipeline, question: str) -> str:
    """Retrieve, print the sources found and return the generated answer."""
    text = _text(pipeline.language)
    chunks = pipeline.retrieve(question)

    if chunks:
        print(f"\n{text['sources']}")
        for i, chunk in enumerate(chunks, 1):
            print(f"{i}. [{chunk.source}] similarity: {chunk.similarity:.4f}")
            print(f"   {chunk.content[:100]}...\n")

    return pipeline.answer(question, chunks)


def interactive(
    pipeline: RetrievalPipeline, read: Callable[[str], str] = input
) -> None:
    text = _text(pipeline.language)
    print(f"\n{text['banner']}")
    print(f"{text['intro']}\n")

    while True:
        try:
            question = read(text["prompt"])
        except (EOFError, KeyboardInterrupt):
            print()
            break

        if question.strip().lower() in EXIT_WORDS:
            break
        if not question.strip():
            print(f"{text['empty']}\n")
            continue

        answer = answer_question(pipeline, question)
        print(f"\n{text['answer']}")
        print(answer)
        print("\n" + "=" * 50 + "\n")

    print(text["bye"])


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(
        description="Ask questions against the tax knowledge base"
    )
    parser.add_argument(
        "question",
        nargs="*",
        help="Question to answer once; starts an interactive session when omitted",
    )
    parser.add_argument(
        "--config",
        type=Path,
        default=None,
        help="Path to configuration file (default: config.toml in project root)",
    )
    parser.add_argument(
        "--store",
        type=Path,
        default=None,
        help="Vector store file (overrides storage.path)",
    )
    parser.add_argument("--top-k", type=int, default=None)
    parser.add_argument(
        "--min-similarity",
        type=float,
        default=None,
        help="Similarity floor (overrides retrieval.min_similarity)",
    )
    parser.add_argument(
        "--no-floor",
        action="store_true",
        help="Show the top-k chunks regardless of similarity",
    )
    parser.add_argument("--language", choices=sorted(UI_TEXT), default=None)
    parser.add_argument("-v", "--verbose", action="store_true")

    args = parser.parse_args(argv)
    if args.top_k is not None and args.top_k < 0:
        parser.error("--top-k must not be negative")

    logging.basicConfig(
        level=logging.INFO if args.verbose else logging.WARNING,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )

    try:
        config_path = find_config_path(args.config)
        config = load_config(config_path)
        store = (
            JSONChunkStore(args.store)
            if args.store
            else create_store_from_config(config, config_path)
        )
        pipeline = RetrievalPipeline.from_config(
            config, config_path, cache=ChunkStoreCache(store)
        )
    except (FileNotFoundError, ValueError) as e:
        print(f"Configuration error: {e}", file=sys.stderr)
        return 1

    if args.language:
        pipeline.language = args.language
    if args.top_k is not None:
        pipeline.top_k = args.top_k
    if args.no_floor:
        pipeline.min_similarity = None
    elif args.min_similarity is not None:
        pipeline.min_similarity = args.min_similarity

    try:
        records = store.load()
        pipeline.cache = ChunkStoreCache(store, records)
    except FileNotFoundError:
        print(_text(pipeline.language)["missing_store"], file=sys.stderr)
        return 1
    except StoreLoadError as e:
        logger.error(str(e))
        print(f"Error: {e}", file=sys.stderr)
        return 1

    logger.info(f"Loaded vector store: {len(records)} chunks")

    if args.question:
        answer = answer_question(pipeline, " ".join(args.question))
        print(f"\n{_text(pipeline.language)['answer']}")
        print(answer)
    else:
        interactive(pipeline)
    return 0


if __name__ == "__main__":
    sys.exit(main())
