import pytest

from models import Author, Book, Loan, Member
from notifications import ChangeNotifier
from repositories import BookRepository, MemberRepository


def make_book(code, title="Dune", available=True):
    return Book(code=code, title=title, author=Author("Herbert"), location="A1", signature="SF-01", available=available)


def test_empty_repository_lists_nothing(book_repo):
    assert book_repo.list_all() == []


def test_save_appends_in_order(member_repo):
    first = Member("M1", "Ana", "Main St")
    second = Member("M2", "Ben", "Elm St")
    member_repo.save(first)
    member_repo.save(second)

    assert member_repo.list_all() == [first, second]


def test_save_does_not_check_duplicates(member_repo):
    member = Member("M1", "Ana", "Main St")
    member_repo.save(member)
    member_repo.save(member)

    assert member_repo.list_all() == [member, member]


def test_records_persist_across_instances(data_dir):
    path = str(data_dir / "books.txt")
    BookRepository(path).save(make_book("B1"))

    assert BookRepository(path).list_all() == [make_book("B1")]


def test_delete_removes_every_match_and_keeps_the_rest(book_repo):
    book_repo.save(make_book("B1"))
    book_repo.save(make_book("B2", title="Emma", available=False))
    book_repo.save(make_book("B1", title="Dune Messiah"))
    book_repo.save(make_book("B3", title="Ulysses"))

    assert book_repo.delete("B1").ok
    assert book_repo.list_all() == [make_book("B2", title="Emma", available=False), make_book("B3", title="Ulysses")]


def test_delete_missing_id_keeps_records_and_still_notifies(member_repo):
    member_repo.save(Member("M1", "Ana", "Main St"))
    calls = []
    member_repo.subscribe(lambda: calls.append("changed"))

    assert member_repo.delete("nope").ok
    assert member_repo.list_all() == [Member("M1", "Ana", "Main St")]
    assert calls == ["changed"]


def test_delete_on_missing_file_creates_empty_file(data_dir, member_repo):
    assert member_repo.delete("M1").ok
    assert (data_dir / "members.txt").read_text() == ""


def test_loans_are_deleted_by_book_code_only(loan_repo):
    loan_repo.save(Loan("M1", "B1", "2024-01-01"))
    loan_repo.save(Loan("B1", "B2", "2024-01-02"))
    loan_repo.save(Loan("M2", "B1", "2024-01-03"))

    loan_repo.delete("B1")
    assert loan_repo.list_all() == [Loan("B1", "B2", "2024-01-02")]


def test_delete_drops_malformed_lines(data_dir, member_repo):
    (data_dir / "members.txt").write_text("M1;Ana;Main St\nbroken line\nM2;Ben;Elm St\n")
    assert member_repo.list_all() == [Member("M1", "Ana", "Main St"), Member("M2", "Ben", "Elm St")]

    member_repo.delete("M1")
    assert (data_dir / "members.txt").read_text().splitlines() == ["M2;Ben;Elm St"]


def test_find_returns_first_match(book_repo):
    book_repo.save(make_book("B1", title="First"))
    book_repo.save(make_book("B1", title="Second"))

    assert book_repo.find("B1").title == "First"
    assert book_repo.find("B9") is None


def test_observers_run_once_each_in_subscription_order(book_repo):
    calls = []
    for n in range(3):
        book_repo.subscribe(lambda n=n: calls.append(n))

    book_repo.save(make_book("B1"))
    assert calls == [0, 1, 2]

    book_repo.delete("B1")
    assert calls == [0, 1, 2, 0, 1, 2]


def test_listing_does_not_notify(book_repo):
    calls = []
    book_repo.subscribe(lambda: calls.append(1))
    book_repo.list_all()
    book_repo.find("B1")
    assert calls == []


def test_unsubscribed_observer_is_not_called(book_repo):
    calls = []
    observer = book_repo.subscribe(lambda: calls.append(1))
    assert book_repo.unsubscribe(observer) is True
    assert book_repo.unsubscribe(observer) is False

    book_repo.save(make_book("B1"))
    assert calls == []


def test_failed_save_is_reported_and_does_not_notify(tmp_path):
    repo = MemberRepository(str(tmp_path / "no-such-dir" / "members.txt"))
    calls = []
    repo.subscribe(lambda: calls.append(1))

    result = repo.save(Member("M1", "Ana", "Main St"))
    assert not result.ok
    assert calls == []
    assert repo.list_all() == []


def test_unreadable_file_is_not_overwritten_by_delete(tmp_path):
    # Pointing the repository at a directory makes every read fail
    repo = MemberRepository(str(tmp_path))
    calls = []
    repo.subscribe(lambda: calls.append(1))

    result = repo.delete("M1")
    assert not result.ok
    assert calls == []
    assert tmp_path.is_dir()


def test_observer_errors_reach_the_caller(member_repo):
    def broken():
        raise RuntimeError("observer failed")

    member_repo.subscribe(broken)
    with pytest.raises(RuntimeError, match="observer failed"):
        member_repo.save(Member("M1", "Ana", "Main St"))
    # The record was written before observers ran
    assert member_repo.list_all() == [Member("M1", "Ana", "Main St")]


def test_change_notifier_counts_observers():
    notifier = ChangeNotifier()
    assert len(notifier) == 0
    notifier.subscribe(lambda: None)
    notifier.subscribe(lambda: None)
    assert len(notifier) == 2
