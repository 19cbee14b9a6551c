"""
Unit tests for ruby_rails_docs.core.generator.

Tests cover:
- Step order and exact arguments of every external command
- Cross-product expansion across version lists
- Reuse of already-built artifacts within one workspace
- Fail-fast aborts and workspace cleanup
- Publishing into the output directory
"""

import shutil
from pathlib import Path
from unittest.mock import patch

import pytest

from ruby_rails_docs.core.commands import CommandResult
from ruby_rails_docs.core.errors import CommandFailedError, CommandNotFoundError
from ruby_rails_docs.core.generator import (
    GenerationRequest,
    RubyRailsDocumentations,
    Toolchain,
    plan_pairs,
)
from ruby_rails_docs.core.labels import DocLabels
from ruby_rails_docs.core.versions import ManyVersions, SingleVersion


class TestSinglePair:
    """Tests for generating one (Ruby, Rails) pair."""

    def test_commands_run_in_pipeline_order(self, generation_request, fake_runner):
        docs = RubyRailsDocumentations(generation_request, runner=fake_runner)

        docs.generate("2.0.0-p195", "4.0.0-rc.1")

        req = generation_request
        assert len(fake_runner.calls) == 6
        workspace = next(iter(fake_runner.workspaces))
        ruby_docs = workspace / "ruby-docs-v2.0.0-p195"
        rails_docs = workspace / "rails-docs-v4.0.0-rc.1"
        merged_docs = workspace / "merged-docs-ruby-v2.0.0-p195-rails-v4.0.0-rc.1"

        assert fake_runner.argvs() == [
            ["git", "checkout", "v2_0_0_195"],
            [
                "ruby",
                "-I",
                str(req.sdoc_lib_dir),
                str(req.sdoc_bin),
                "--github",
                "--all",
                "-o",
                str(ruby_docs),
                str(req.ruby_dir),
            ],
            ["git", "checkout", "v4.0.0-rc.1"],
            ["rake", "clobber"],
            ["rake", "-I", str(req.sdoc_lib_dir), "rdoc"],
            [
                "ruby",
                "-I",
                str(req.sdoc_lib_dir),
                str(req.sdoc_merge_bin),
                "--op",
                str(merged_docs),
                "--title",
                "Ruby v2.0.0-p195, Rails v4.0.0-rc.1",
                "--names",
                "Ruby,Rails",
                str(ruby_docs),
                str(rails_docs),
            ],
        ]

    def test_working_directories_and_env(self, generation_request, fake_runner):
        docs = RubyRailsDocumentations(generation_request, runner=fake_runner)

        docs.generate("2.0.0", "4.0.0")

        calls = fake_runner.calls
        assert calls[0].cwd == generation_request.ruby_dir
        assert calls[1].cwd is None
        assert dict(calls[1].env) == {"SDOC_FORCE_MAIN_PAGE": "README"}
        assert [call.cwd for call in calls[2:5]] == [generation_request.rails_dir] * 3
        assert all(not call.env for call in calls if call is not calls[1])
        assert calls[5].cwd is None

    def test_output_directory_name(self, generation_request, fake_runner):
        docs = RubyRailsDocumentations(generation_request, runner=fake_runner)

        published = docs.generate("2.0.0", "4.0.0")

        expected = generation_request.output_dir / "Ruby v2.0.0, Ruby on Rails v4.0.0"
        assert published[0].output_dir == expected
        assert (expected / "index.html").is_file()
        assert list(generation_request.output_dir.iterdir()) == [expected]

    def test_rails_rdoc_output_is_moved_out_of_tree(self, generation_request, fake_runner):
        docs = RubyRailsDocumentations(generation_request, runner=fake_runner)

        docs.generate("2.0.0", "4.0.0")

        assert not (generation_request.rails_dir / "doc" / "rdoc").exists()

    def test_custom_toolchain_and_labels(self, generation_request, fake_runner):
        docs = RubyRailsDocumentations(
            generation_request,
            runner=fake_runner,
            toolchain=Toolchain(ruby="ruby2.0", rake="bundle-rake", git="/usr/bin/git"),
            labels=DocLabels(rails_output_name="Rails"),
        )

        published = docs.generate("2.0.0", "4.0.0")

        executables = [argv[0] for argv in fake_runner.argvs()]
        assert executables == [
            "/usr/bin/git",
            "ruby2.0",
            "/usr/bin/git",
            "bundle-rake",
            "bundle-rake",
            "ruby2.0",
        ]
        assert published[0].output_dir.name == "Ruby v2.0.0, Rails v4.0.0"

    def test_output_root_is_created(self, generation_request, fake_runner):
        nested = generation_request.output_dir / "a" / "b"
        request = GenerationRequest(
            output_dir=nested,
            sdoc_dir=generation_request.sdoc_dir,
            ruby_dir=generation_request.ruby_dir,
            rails_dir=generation_request.rails_dir,
        )

        RubyRailsDocumentations(request, runner=fake_runner).generate([], "4.0.0")

        assert nested.is_dir()
        assert fake_runner.calls == []

    def test_existing_output_content_is_merged(self, generation_request, fake_runner):
        target = generation_request.output_dir / "Ruby v2.0.0, Ruby on Rails v4.0.0"
        target.mkdir(parents=True)
        (target / "notes.txt").write_text("keep me")
        (target / "index.html").write_text("stale")

        RubyRailsDocumentations(generation_request, runner=fake_runner).generate(
            "2.0.0", "4.0.0"
        )

        assert (target / "notes.txt").read_text() == "keep me"
        assert "merged-docs" in (target / "index.html").read_text()


class TestBatchGeneration:
    """Tests for version lists and cross-product runs."""

    def test_two_ruby_versions_one_rails(self, generation_request, fake_runner):
        docs = RubyRailsDocumentations(generation_request, runner=fake_runner)

        published = docs.generate(["2.0.0", "2.1.0"], ["4.0.0"])

        assert [(p.ruby_version, p.rails_version) for p in published] == [
            ("2.0.0", "4.0.0"),
            ("2.1.0", "4.0.0"),
        ]
        assert fake_runner.count("sdoc-merge") == 2
        # Rails docs for 4.0.0 are built once and reused for the second pair
        assert fake_runner.count("rake -I") == 1
        assert published[1].rails_docs_reused is True
        assert published[1].ruby_docs_reused is False

    def test_ruby_versions_are_outer_loop(self, generation_request, fake_runner):
        docs = RubyRailsDocumentations(generation_request, runner=fake_runner)

        published = docs.generate(["1.9.3", "2.0.0"], ["3.2.13", "4.0.0"])

        assert [(p.ruby_version, p.rails_version) for p in published] == [
            ("1.9.3", "3.2.13"),
            ("1.9.3", "4.0.0"),
            ("2.0.0", "3.2.13"),
            ("2.0.0", "4.0.0"),
        ]
        assert len(list(generation_request.output_dir.iterdir())) == 4
        assert fake_runner.count("sdoc --github") == 2
        assert fake_runner.count("rake -I") == 2

    def test_tagged_union_arguments_are_accepted(self, generation_request, fake_runner):
        docs = RubyRailsDocumentations(generation_request, runner=fake_runner)

        published = docs.generate(ManyVersions(("2.0.0",)), SingleVersion("4.0.0"))

        assert len(published) == 1

    def test_duplicate_pair_reuses_artifacts_but_publishes(
        self, generation_request, fake_runner
    ):
        docs = RubyRailsDocumentations(generation_request, runner=fake_runner)

        with patch(
            "ruby_rails_docs.core.generator.shutil.copytree", wraps=shutil.copytree
        ) as copytree:
            published = docs.generate(["2.0.0", "2.0.0"], "4.0.0")

        assert len(published) == 2
        assert len(fake_runner.calls) == 6
        publishes = [c for c in copytree.call_args_list if c.kwargs.get("dirs_exist_ok")]
        assert len(publishes) == 2
        second = published[1]
        assert second.ruby_docs_reused
        assert second.rails_docs_reused
        assert second.merged_docs_reused

    def test_each_generate_call_gets_a_fresh_workspace(
        self, generation_request, fake_runner
    ):
        docs = RubyRailsDocumentations(generation_request, runner=fake_runner)

        docs.generate("2.0.0", "4.0.0")
        docs.generate("2.0.0", "4.0.0")

        assert len(fake_runner.calls) == 12
        assert len(fake_runner.workspaces) == 2


class TestFailFast:
    """Tests for abort semantics on external command failure."""

    def test_failed_clobber_stops_pair_and_batch(self, generation_request, make_runner):
        runner = make_runner(fail_on="rake clobber", fail_status=2)
        docs = RubyRailsDocumentations(generation_request, runner=runner)

        with pytest.raises(CommandFailedError) as exc_info:
            docs.generate(["2.0.0", "2.1.0"], "4.0.0")

        message = str(exc_info.value)
        assert f"[{generation_request.rails_dir}] rake clobber" in message
        assert "failed with status 2" in message
        assert exc_info.value.returncode == 2
        assert runner.count("rdoc") == 0
        assert runner.count("sdoc-merge") == 0
        assert runner.count("v2_1_0") == 0
        assert list(generation_request.output_dir.iterdir()) == []

    @pytest.mark.parametrize(
        "step",
        [
            "git checkout v2_0_0",
            "sdoc --github",
            "git checkout v4.0.0",
            "rake clobber",
            "rake -I",
            "sdoc-merge",
        ],
    )
    def test_any_failing_step_aborts_run(self, generation_request, make_runner, step):
        runner = make_runner(fail_on=step, fail_status=1)
        docs = RubyRailsDocumentations(generation_request, runner=runner)

        with pytest.raises(CommandFailedError) as exc_info:
            docs.generate(["2.0.0", "2.1.0"], "4.0.0")

        assert step in exc_info.value.command.describe()
        assert runner.calls[-1] is exc_info.value.command
        assert runner.count("v2_1_0") == 0
        assert list(generation_request.output_dir.iterdir()) == []
        assert all(not workspace.exists() for workspace in runner.workspaces)

    def test_failure_in_second_pair_keeps_first_published(
        self, generation_request, make_runner
    ):
        runner = make_runner(fail_on="checkout v2_1_0")
        docs = RubyRailsDocumentations(generation_request, runner=runner)

        with pytest.raises(CommandFailedError):
            docs.generate(["2.0.0", "2.1.0", "2.2.0"], "4.0.0")

        output = generation_request.output_dir
        assert (output / "Ruby v2.0.0, Ruby on Rails v4.0.0").is_dir()
        assert not (output / "Ruby v2.1.0, Ruby on Rails v4.0.0").exists()
        assert runner.count("v2_2_0") == 0
        assert runner.calls[-1].argv == ("git", "checkout", "v2_1_0")

    def test_workspace_removed_after_success(self, generation_request, fake_runner):
        RubyRailsDocumentations(generation_request, runner=fake_runner).generate(
            ["2.0.0", "2.1.0"], "4.0.0"
        )

        assert fake_runner.workspaces
        assert all(not workspace.exists() for workspace in fake_runner.workspaces)

    def test_workspace_removed_after_failure(self, generation_request, make_runner):
        runner = make_runner(fail_on="sdoc-merge")
        docs = RubyRailsDocumentations(generation_request, runner=runner)

        with pytest.raises(CommandFailedError):
            docs.generate("2.0.0", "4.0.0")

        assert runner.workspaces
        assert all(not workspace.exists() for workspace in runner.workspaces)

    def test_workspace_removed_after_filesystem_error(
        self, generation_request, fake_runner
    ):
        def no_rdoc_output(command):
            if command.argv[-1] == "rdoc":
                return CommandResult(returncode=0)
            return fake_runner(command)

        docs = RubyRailsDocumentations(generation_request, runner=no_rdoc_output)

        with pytest.raises(FileNotFoundError):
            docs.generate("2.0.0", "4.0.0")

        assert fake_runner.workspaces
        assert all(not workspace.exists() for workspace in fake_runner.workspaces)

    def test_missing_executable_aborts(self, generation_request):
        def runner(command):
            raise FileNotFoundError(2, "No such file or directory", command.argv[0])

        docs = RubyRailsDocumentations(generation_request, runner=runner)

        with pytest.raises(CommandNotFoundError) as exc_info:
            docs.generate("2.0.0", "4.0.0")

        assert exc_info.value.command.argv == ("git", "checkout", "v2_0_0")


class TestPlan:
    """Tests for the side-effect free plan preview."""

    def test_plan_lists_tags_and_outputs(self, generation_request, fake_runner):
        docs = RubyRailsDocumentations(generation_request, runner=fake_runner)

        planned = docs.plan(["2.0.0-p195", "2.1"], "4.0.0-rc.1")

        assert [(p.ruby_tag, p.rails_tag) for p in planned] == [
            ("v2_0_0_195", "v4.0.0-rc.1"),
            ("v2.1", "v4.0.0-rc.1"),
        ]
        assert planned[0].output_dir == Path(
            generation_request.output_dir, "Ruby v2.0.0-p195, Ruby on Rails v4.0.0-rc.1"
        )
        assert fake_runner.calls == []
        assert not generation_request.output_dir.exists()

    def test_plan_pairs_needs_no_checkouts(self, tmp_path):
        planned = plan_pairs(
            tmp_path / "docs",
            "1.9.3-p429",
            ["3.2.13", "4.0.0"],
            labels=DocLabels(rails_output_name="Rails"),
        )

        assert [p.output_dir.name for p in planned] == [
            "Ruby v1.9.3-p429, Rails v3.2.13",
            "Ruby v1.9.3-p429, Rails v4.0.0",
        ]
        assert planned[0].ruby_tag == "v1_9_3_429"
        assert not (tmp_path / "docs").exists()
