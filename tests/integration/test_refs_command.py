"""Integration tests for show-ref, symbolic-ref and rev-parse."""

import pytest
from click.testing import CliRunner
from loosegit.cli.main import cli
from conftest import write_ref


def run(git_dir, *args):
    runner = CliRunner()
    return runner.invoke(cli, ['--git-dir', str(git_dir), *args])


class TestShowRefCommand:
    """Tests for loosegit show-ref."""
    
    def test_show_all_refs(self, repo_with_commit):
        """Test every reference is listed with its hash."""
        result = run(repo_with_commit['git_dir'], 'show-ref')
        
        assert result.exit_code == 0
        commit = repo_with_commit['commit']
        for name in ('refs/heads/main', 'refs/tags/v1.0', 'refs/remotes/origin/main',
                     'refs/remotes/origin/HEAD'):
            assert f"{commit} {name}" in result.output
    
    def test_show_heads_only(self, repo_with_commit):
        """Test --heads limits output to branches."""
        result = run(repo_with_commit['git_dir'], 'show-ref', '--heads')
        
        assert result.exit_code == 0
        assert 'refs/heads/main' in result.output
        assert 'refs/tags/v1.0' not in result.output
        assert 'refs/remotes' not in result.output
    
    def test_show_tags_only(self, repo_with_commit):
        """Test --tags limits output to tags."""
        result = run(repo_with_commit['git_dir'], 'show-ref', '--tags')
        
        assert result.exit_code == 0
        assert 'refs/tags/v1.0' in result.output
        assert 'refs/heads/main' not in result.output
    
    def test_show_head(self, repo_with_commit):
        """Test --head adds the HEAD line."""
        result = run(repo_with_commit['git_dir'], 'show-ref', '--head')
        
        assert result.exit_code == 0
        assert f"{repo_with_commit['commit']} HEAD" in result.output
    
    def test_show_packed_refs(self, git_dir):
        """Test references from packed-refs are listed."""
        (git_dir / 'packed-refs').write_text(f"{'a' * 40} refs/tags/v0.9\n")
        
        result = run(git_dir, 'show-ref')
        
        assert result.exit_code == 0
        assert f"{'a' * 40} refs/tags/v0.9" in result.output
    
    def test_no_refs(self, git_dir):
        """Test an empty repository."""
        result = run(git_dir, 'show-ref')
        
        assert result.exit_code == 0
        assert 'No references found' in result.output
    
    def test_corrupt_ref(self, git_dir):
        """Test a corrupt reference aborts."""
        write_ref(git_dir, 'refs/heads/main', 'garbage')
        
        result = run(git_dir, 'show-ref')
        
        assert result.exit_code == 1
        assert 'show-ref failed' in result.output
    
    def test_not_a_repository(self, temp_dir, isolated_config):
        """Test a missing git directory aborts."""
        result = run(temp_dir / 'missing', 'show-ref')
        
        assert result.exit_code == 1
        assert 'Not a git repository' in result.output
    
    def test_discovers_repository(self, repo_with_commit, monkeypatch):
        """Test the git directory is found from the work tree."""
        work_tree = repo_with_commit['git_dir'].parent
        (work_tree / 'src').mkdir()
        monkeypatch.chdir(work_tree / 'src')
        
        result = CliRunner().invoke(cli, ['show-ref', '--heads'])
        
        assert result.exit_code == 0
        assert 'refs/heads/main' in result.output


class TestSymbolicRefCommand:
    """Tests for loosegit symbolic-ref."""
    
    def test_symbolic_head(self, git_dir):
        """Test printing the branch HEAD points to."""
        result = run(git_dir, 'symbolic-ref', 'HEAD')
        
        assert result.exit_code == 0
        assert result.output.strip() == 'refs/heads/main'
    
    def test_detached_head(self, git_dir):
        """Test a detached HEAD is not symbolic."""
        (git_dir / 'HEAD').write_text('a' * 40 + '\n')
        
        result = run(git_dir, 'symbolic-ref', 'HEAD')
        
        assert result.exit_code == 1
        assert 'detached HEAD' in result.output
    
    def test_other_names_unsupported(self, git_dir):
        """Test only HEAD can be read."""
        result = run(git_dir, 'symbolic-ref', 'ORIG_HEAD')
        assert result.exit_code == 1


class TestRevParseCommand:
    """Tests for loosegit rev-parse."""
    
    @pytest.mark.parametrize('rev', ['HEAD', 'main', 'refs/heads/main', 'v1.0', 'origin/main'])
    def test_resolve(self, repo_with_commit, rev):
        """Test names resolve to the commit."""
        result = run(repo_with_commit['git_dir'], 'rev-parse', rev)
        
        assert result.exit_code == 0
        assert result.output.strip() == repo_with_commit['commit']
    
    def test_default_is_head(self, repo_with_commit):
        """Test HEAD is resolved when no revision is given."""
        result = run(repo_with_commit['git_dir'], 'rev-parse')
        assert result.output.strip() == repo_with_commit['commit']
    
    def test_unknown_revision(self, repo_with_commit):
        """Test an unknown name aborts."""
        result = run(repo_with_commit['git_dir'], 'rev-parse', 'nope')
        
        assert result.exit_code == 1
        assert "unknown revision 'nope'" in result.output
    
    def test_head_target_missing(self, git_dir):
        """Test an unborn branch is reported."""
        result = run(git_dir, 'rev-parse', 'HEAD')
        
        assert result.exit_code == 1
        assert "reference 'refs/heads/main' not found" in result.output
