"""
Tests for genome-coordinate track construction and bedGraph output.
"""

import sys
import os

sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

import numpy as np
import pandas as pd


class TestSegmentTrack:
    """Unit tests for segment_track coordinates."""

    def test_coordinates(self):
        from Utilities.sequence_splitter import SequenceSegment
        from Utilities.track_writer import segment_track
        segment = SequenceSegment(start=9, end=60, sequence="A" * 52)
        track = segment_track("chr1", segment, np.array([0.5, 1.5, 2.5]), offset=21)
        assert list(track.columns) == ["chrom", "start", "end", "value"]
        # first value sits at 1-based base 9 + 21 = 30, BED start 29
        assert track["start"].tolist() == [29, 30, 31]
        assert track["end"].tolist() == [30, 31, 32]
        assert track["value"].tolist() == [0.5, 1.5, 2.5]
        assert set(track["chrom"]) == {"chr1"}

    def test_empty_values(self):
        from Utilities.sequence_splitter import SequenceSegment
        from Utilities.track_writer import segment_track
        segment = SequenceSegment(start=1, end=10, sequence="A" * 10)
        track = segment_track("chr1", segment, np.array([]), offset=21)
        assert track.empty
        assert list(track.columns) == ["chrom", "start", "end", "value"]

    def test_concat_skips_empty(self):
        from Utilities.sequence_splitter import SequenceSegment
        from Utilities.track_writer import concat_tracks, empty_track, segment_track
        a = segment_track("a", SequenceSegment(1, 5, "ACGTA"), [1.0], offset=1)
        b = segment_track("b", SequenceSegment(1, 5, "ACGTA"), [2.0, 3.0], offset=1)
        track = concat_tracks([a, empty_track(), b])
        assert track["chrom"].tolist() == ["a", "b", "b"]
        assert track.index.tolist() == [0, 1, 2]

    def test_concat_nothing(self):
        from Utilities.track_writer import concat_tracks
        assert concat_tracks([]).empty


class TestWriteBedgraph:
    """Unit tests for bedGraph output."""

    def _track(self):
        return pd.DataFrame({
            "chrom": ["chr1", "chr1"],
            "start": [10, 11],
            "end": [11, 12],
            "value": [0.25, 1.0 / 3.0],
        })

    def test_rows_and_header(self, tmp_path):
        from Utilities.track_writer import write_bedgraph
        path = tmp_path / "out.bedgraph"
        rows = write_bedgraph(self._track(), str(path), track_name="curvature")
        lines = path.read_text(encoding="utf-8").splitlines()
        assert rows == 2
        assert lines[0] == 'track type=bedGraph name="curvature"'
        assert lines[1] == "chr1\t10\t11\t0.25"
        assert lines[2] == "chr1\t11\t12\t0.3333333333333333"

    def test_values_round_trip(self, tmp_path):
        from Utilities.track_writer import write_bedgraph
        values = np.array([10.770329614269007, 1.0 / 7.0, 123456.78901234567, 1e-12])
        track = pd.DataFrame({
            "chrom": ["chr1"] * 4,
            "start": [0, 1, 2, 3],
            "end": [1, 2, 3, 4],
            "value": values,
        })
        path = tmp_path / "out.bedgraph"
        write_bedgraph(track, str(path))
        written = [float(line.split("\t")[3])
                   for line in path.read_text(encoding="utf-8").splitlines()]
        assert written == values.tolist()

    def test_explicit_float_format(self, tmp_path):
        from Utilities.track_writer import write_bedgraph
        path = tmp_path / "out.bedgraph"
        write_bedgraph(self._track(), str(path), float_format="%.3g")
        assert path.read_text(encoding="utf-8").splitlines()[1] == "chr1\t11\t12\t0.333"

    def test_no_header(self, tmp_path):
        from Utilities.track_writer import write_bedgraph
        path = tmp_path / "out.bedgraph"
        write_bedgraph(self._track(), str(path))
        assert path.read_text(encoding="utf-8").startswith("chr1\t10\t11\t")

    def test_empty_track(self, tmp_path):
        from Utilities.track_writer import empty_track, write_bedgraph
        path = tmp_path / "out.bedgraph"
        assert write_bedgraph(empty_track(), str(path)) == 0
        assert path.read_text(encoding="utf-8") == ""
